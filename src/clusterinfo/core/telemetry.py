# src/clusterinfo/core/telemetry.py
"""Initializes OpenTelemetry tracing and metrics for the reconciliation service."""

import logging
import os

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")


def initialize_telemetry():
    """
    Configures the TracerProvider and MeterProvider, exporting via OTLP/HTTP.
    Until this is called the tracer and meter below are no-ops.
    """
    resource = Resource(attributes={SERVICE_NAME: "clusterinfo-maintainer"})

    tracer_provider = TracerProvider(resource=resource)
    span_exporter = OTLPSpanExporter(endpoint=f"{OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
    tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))
    trace.set_tracer_provider(tracer_provider)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=f"{OTEL_EXPORTER_OTLP_ENDPOINT}/v1/metrics")
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(meter_provider)
    logger.info(f"OpenTelemetry initialized. Exporting to: {OTEL_EXPORTER_OTLP_ENDPOINT}")


tracer = trace.get_tracer("clusterinfo.tracer")
meter = metrics.get_meter("clusterinfo.meter")

deployments_updated_counter = meter.create_counter(
    "clusterinfo.deployments.updated",
    description="Deployments whose cluster info was refreshed.",
)
deployments_skipped_counter = meter.create_counter(
    "clusterinfo.deployments.skipped",
    description="Deployments left unchanged because a fetch, parse or store failed.",
)
