from pytest_archon import archrule


def test_core_is_transport_independent() -> None:
    """
    Codec, propagation and tracking must not depend on any broker adapter.
    aio-pika is an optional extra.
    """
    (
        archrule("core_is_transport_independent")
        .match("cqrs_ddd_messenger.codec")
        .match("cqrs_ddd_messenger.propagation")
        .match("cqrs_ddd_messenger.tracker")
        .match("cqrs_ddd_messenger.serialization")
        .should_not_import("cqrs_ddd_messenger.rabbitmq*")
        .should_not_import("aio_pika*")
        .check("cqrs_ddd_messenger")
    )


def test_middleware_does_not_touch_wire_format() -> None:
    """
    Middleware stamps envelopes; encoding belongs to the codec.
    """
    (
        archrule("middleware_isolation")
        .match("cqrs_ddd_messenger.middleware*")
        .should_not_import("cqrs_ddd_messenger.codec")
        .should_not_import("cqrs_ddd_messenger.serialization")
        .should_not_import("cqrs_ddd_messenger.rabbitmq*")
        .check("cqrs_ddd_messenger")
    )


def test_primitives_isolation() -> None:
    """
    Messages and envelopes are leaf modules.
    """
    (
        archrule("primitives_isolation")
        .match("cqrs_ddd_messenger.message")
        .match("cqrs_ddd_messenger.envelope")
        .should_not_import("cqrs_ddd_messenger.codec")
        .should_not_import("cqrs_ddd_messenger.middleware*")
        .should_not_import("cqrs_ddd_messenger.tracker")
        .check("cqrs_ddd_messenger")
    )
