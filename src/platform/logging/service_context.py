"""
Service context extraction for log lines.

Identifies the emitting service, deployment environment and process so that
log lines from several workers behind one load balancer can be told apart.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-admission')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostname when running in a pod, PID otherwise
    instance = os.getenv('HOSTNAME', '') or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance[:12]}'
