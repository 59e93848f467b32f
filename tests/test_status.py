#tests\test_status.py

"""Test status reduction, pod classification and aggregation."""

from datetime import datetime, timezone

import pytest
from kubernetes.client import (
    V1ContainerState,
    V1ContainerStateTerminated,
    V1ContainerStateWaiting,
    V1ContainerStatus,
    V1ObjectMeta,
    V1Pod,
    V1PodStatus,
)

from kube_deployer.core.models import AppInstanceStatus, AppStatus, DeploymentState
from kube_deployer.domain.identity import APP_LABEL
from kube_deployer.status.aggregator import StatusAggregator
from kube_deployer.status.instance_status import KubernetesInstanceStatusClassifier


def make_pod(name="time-0", phase="Running", ready=True, restart_count=0,
             state=None, last_state=None, app_id="time"):
    return V1Pod(
        metadata=V1ObjectMeta(name=name, labels={APP_LABEL: app_id}),
        status=V1PodStatus(
            phase=phase,
            pod_ip="10.0.0.5",
            host_ip="192.168.1.10",
            start_time=datetime(2026, 1, 1, tzinfo=timezone.utc),
            container_statuses=[
                V1ContainerStatus(
                    name=app_id,
                    image="time:latest",
                    image_id="",
                    ready=ready,
                    restart_count=restart_count,
                    state=state,
                    last_state=last_state,
                )
            ],
        ),
    )


def status_of(*states):
    builder = AppStatus.of("app")
    for index, state in enumerate(states):
        builder.with_instance(AppInstanceStatus(id=f"app-{index}", state=state))
    return builder.build()


class TestAppStatusReduction:
    """Test reduction of instance states."""

    def test_no_instances_is_unknown(self):
        assert status_of().state == DeploymentState.UNKNOWN

    def test_uniform_state(self):
        status = status_of(DeploymentState.DEPLOYED, DeploymentState.DEPLOYED)
        assert status.state == DeploymentState.DEPLOYED

    @pytest.mark.parametrize("states, expected", [
        ((DeploymentState.DEPLOYED, DeploymentState.ERROR), DeploymentState.ERROR),
        ((DeploymentState.DEPLOYED, DeploymentState.DEPLOYING), DeploymentState.DEPLOYING),
        ((DeploymentState.DEPLOYED, DeploymentState.FAILED), DeploymentState.PARTIAL),
        ((DeploymentState.FAILED, DeploymentState.UNKNOWN), DeploymentState.FAILED),
        ((DeploymentState.UNKNOWN, DeploymentState.UNDEPLOYED), DeploymentState.PARTIAL),
    ])
    def test_mixed_states(self, states, expected):
        assert status_of(*states).state == expected

    def test_instances_keyed_by_id(self):
        status = status_of(DeploymentState.DEPLOYED, DeploymentState.DEPLOYING)
        assert list(status.instances) == ["app-0", "app-1"]
        assert status.deployment_id == "app"


class TestInstanceStatusClassifier:
    """Test per-pod classification."""

    @pytest.fixture
    def classifier(self, settings):
        return KubernetesInstanceStatusClassifier(settings)

    def test_absent_pod(self, classifier):
        """Test missing pod is UNKNOWN."""
        status = classifier.classify("time", None)

        assert status.state == DeploymentState.UNKNOWN
        assert status.id == "time-absent"

    def test_pending(self, classifier):
        assert classifier.classify("time", make_pod(phase="Pending")).state == DeploymentState.DEPLOYING

    def test_failed_phase(self, classifier):
        assert classifier.classify("time", make_pod(phase="Failed")).state == DeploymentState.FAILED

    def test_unknown_phase(self, classifier):
        assert classifier.classify("time", make_pod(phase="Unknown")).state == DeploymentState.UNKNOWN

    def test_running_ready(self, classifier):
        assert classifier.classify("time", make_pod()).state == DeploymentState.DEPLOYED

    def test_running_not_ready(self, classifier):
        pod = make_pod(ready=False, restart_count=1)
        assert classifier.classify("time", pod).state == DeploymentState.DEPLOYING

    def test_repeatedly_oom_killed(self, classifier):
        """Test containers killed past the restart threshold are FAILED."""
        pod = make_pod(
            ready=False,
            restart_count=3,
            last_state=V1ContainerState(
                terminated=V1ContainerStateTerminated(exit_code=137, reason="OOMKilled")
            ),
        )

        assert classifier.classify("time", pod).state == DeploymentState.FAILED

    def test_killed_below_threshold(self, classifier):
        """Test kills within the restart allowance are still DEPLOYING."""
        pod = make_pod(
            ready=False,
            restart_count=2,
            last_state=V1ContainerState(
                terminated=V1ContainerStateTerminated(exit_code=137, reason="OOMKilled")
            ),
        )

        assert classifier.classify("time", pod).state == DeploymentState.DEPLOYING

    def test_repeated_errors(self, classifier):
        pod = make_pod(
            ready=False,
            restart_count=3,
            state=V1ContainerState(
                terminated=V1ContainerStateTerminated(exit_code=1, reason="Error")
            ),
            last_state=V1ContainerState(
                terminated=V1ContainerStateTerminated(exit_code=1, reason="Error")
            ),
        )

        assert classifier.classify("time", pod).state == DeploymentState.FAILED

    def test_crash_loop(self, classifier):
        pod = make_pod(
            ready=False,
            restart_count=5,
            state=V1ContainerState(
                waiting=V1ContainerStateWaiting(reason="CrashLoopBackOff")
            ),
        )

        assert classifier.classify("time", pod).state == DeploymentState.FAILED

    def test_attributes(self, classifier):
        status = classifier.classify("time", make_pod(name="time-x"))

        assert status.id == "time-x"
        assert status.attributes == {
            "pod_name": "time-x",
            "pod_phase": "Running",
            "pod_ip": "10.0.0.5",
            "host_ip": "192.168.1.10",
            "pod_start_time": "2026-01-01T00:00:00+00:00",
        }


class NoResultCluster:
    """Cluster stub whose pod query returns no result set."""

    def __init__(self):
        self.selectors = []

    def list_pods(self, selector):
        self.selectors.append(selector)
        return None


class TestStatusAggregator:
    """Test aggregation across pods."""

    def test_never_deployed_is_unknown(self, cluster, settings):
        aggregator = StatusAggregator(cluster, KubernetesInstanceStatusClassifier(settings))

        status = aggregator.status("time")

        assert status.state == DeploymentState.UNKNOWN
        assert status.instances == {}

    def test_no_result_set_uses_placeholder(self, settings):
        stub = NoResultCluster()
        aggregator = StatusAggregator(stub, KubernetesInstanceStatusClassifier(settings))

        status = aggregator.status("time")

        assert stub.selectors == [{APP_LABEL: "time"}]
        assert list(status.instances) == ["time-absent"]
        assert status.state == DeploymentState.UNKNOWN

    def test_only_matching_pods(self, cluster, settings):
        cluster._pods["time-0"] = make_pod(name="time-0", app_id="time")
        cluster._pods["log-0"] = make_pod(name="log-0", app_id="log")
        aggregator = StatusAggregator(cluster, KubernetesInstanceStatusClassifier(settings))

        status = aggregator.status("time")

        assert list(status.instances) == ["time-0"]
        assert status.state == DeploymentState.DEPLOYED
