# kube_deployer/status/aggregator.py

import logging

from kube_deployer.core.cluster import ClusterClient
from kube_deployer.core.models import AppStatus
from kube_deployer.domain.identity import app_selector
from kube_deployer.status.instance_status import InstanceStatusClassifier

logger = logging.getLogger(__name__)


class StatusAggregator:
    """Builds the status of an app from its pods. Nothing is cached."""

    def __init__(self, cluster: ClusterClient, classifier: InstanceStatusClassifier):
        self._cluster = cluster
        self._classifier = classifier

    def status(self, app_id: str) -> AppStatus:
        pods = self._cluster.list_pods(app_selector(app_id))

        builder = AppStatus.of(app_id)
        if pods is None:
            builder.with_instance(self._classifier.classify(app_id, None))
        else:
            for pod in pods:
                builder.with_instance(self._classifier.classify(app_id, pod))

        status = builder.build()
        logger.debug(f"Status for app: {app_id} is {status.state.value}")
        return status
