import json
import logging
import os
import sys

import structlog
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource


def configure_logging():
    """
    Set up structured JSON logging for the simulation using structlog.

    Log records are rendered as JSON on stdout. When OTEL_EXPORTER_OTLP_ENDPOINT
    is set they are also shipped to that collector through OpenTelemetry.
    Safe to call more than once; only the first call configures anything.
    """
    import atexit

    root_logger = logging.getLogger()

    if hasattr(configure_logging, "_configured"):
        return root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.THREAD_NAME,
                ]
            ),
            structlog.processors.JSONRenderer(sort_keys=True, serializer=json.dumps),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    root_logger.setLevel(log_level)

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        try:
            resource = Resource.create(
                {
                    "service.name": os.getenv("SERVICE_NAME", "elevator-bank"),
                    "service.namespace": "elevator-bank",
                }
            )
            logger_provider = LoggerProvider(resource=resource)
            logger_provider.add_log_record_processor(
                BatchLogRecordProcessor(
                    OTLPLogExporter(endpoint=otlp_endpoint, insecure=True)
                )
            )
            set_logger_provider(logger_provider)
            root_logger.addHandler(
                LoggingHandler(level=log_level, logger_provider=logger_provider)
            )
            atexit.register(logger_provider.shutdown)
        except Exception as e:
            logging.error(f"Failed to configure OpenTelemetry logging: {e}")
            logging.warning("Falling back to console logging without OpenTelemetry")

    configure_logging._configured = True
    return root_logger
