"""Observability: logging and metrics for publishers and advice."""

from publisher.observability.logger import get_logger
from publisher.observability.metrics import Metrics

__all__ = ["get_logger", "Metrics"]
