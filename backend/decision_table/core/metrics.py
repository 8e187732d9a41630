"""
Prometheus metrics configuration
"""
import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
)
from prometheus_client.multiprocess import MultiProcessCollector
from prometheus_client.registry import REGISTRY

if os.environ.get('PROMETHEUS_MULTIPROC_DIR'):
    _EXPOSED_REGISTRY = CollectorRegistry()
    MultiProcessCollector(_EXPOSED_REGISTRY)
else:
    _EXPOSED_REGISTRY = REGISTRY

# ============================================================================
# HTTP Request Metrics
# ============================================================================

http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0)
)

http_errors_total = Counter(
    'http_errors_total',
    'Total number of HTTP errors',
    ['method', 'endpoint', 'status_code', 'error_type']
)

# ============================================================================
# Evaluation Metrics
# ============================================================================

evaluations_total = Counter(
    'evaluations_total',
    'Total number of completed evaluations',
    ['rule_set', 'outcome']
)

evaluation_failures_total = Counter(
    'evaluation_failures_total',
    'Total number of evaluations aborted by a missing field',
    ['rule_set', 'field']
)

# ============================================================================
# Application Info
# ============================================================================

app_info = Info('decision_table_app', 'Application information')


def record_app_info(app_name: str, app_env: str, version: str):
    """Publish static application info"""
    app_info.info({'app_name': app_name, 'app_env': app_env, 'version': version})


# ============================================================================
# Helper Functions
# ============================================================================

def get_metrics():
    """
    Get Prometheus metrics in text format

    Returns:
        bytes: Metrics in Prometheus text format
    """
    return generate_latest(_EXPOSED_REGISTRY)


def get_metrics_content_type():
    """
    Get content type for Prometheus metrics

    Returns:
        str: Content type for metrics endpoint
    """
    return CONTENT_TYPE_LATEST
