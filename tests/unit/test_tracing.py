"""Tests for the traced decorator."""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from smartcampus.shared.telemetry import tracing


@pytest.fixture
def exporter(monkeypatch: pytest.MonkeyPatch) -> InMemorySpanExporter:
    memory = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(memory))
    monkeypatch.setattr(tracing.trace, "get_tracer", provider.get_tracer)
    return memory


async def test_positional_ids_are_recorded(exporter: InMemorySpanExporter) -> None:
    class Service:
        @tracing.traced("svc.delete_admin")
        async def delete_admin(self, admin_id: str, password: str = "") -> str:
            return admin_id

    assert await Service().delete_admin("u1", "secret") == "u1"

    (span,) = exporter.get_finished_spans()
    assert span.name == "svc.delete_admin"
    assert span.attributes["arg.admin_id"] == "u1"
    assert "arg.password" not in span.attributes
    assert "arg.self" not in span.attributes
    assert span.status.status_code is StatusCode.OK


async def test_keyword_ids_and_static_attributes(exporter: InMemorySpanExporter) -> None:
    @tracing.traced("svc.set_status", attributes={"entity_type": "campus"})
    async def set_status(campus_id: str, new_status: str) -> None:
        return None

    await set_status(campus_id="c1", new_status="active")

    (span,) = exporter.get_finished_spans()
    assert span.attributes["entity_type"] == "campus"
    assert span.attributes["arg.campus_id"] == "c1"
    assert span.attributes["arg.new_status"] == "active"


async def test_errors_mark_the_span(exporter: InMemorySpanExporter) -> None:
    @tracing.traced()
    async def boom(campus_id: str) -> None:
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        await boom("c1")

    (span,) = exporter.get_finished_spans()
    assert span.status.status_code is StatusCode.ERROR
    assert span.attributes["arg.campus_id"] == "c1"


def test_sync_functions_are_rejected() -> None:
    with pytest.raises(TypeError):

        @tracing.traced()
        def plain(campus_id: str) -> None:
            return None
