#kube_deployer\api\container.py
from kube_deployer.container import build_deployer
from kube_deployer.deployer import KubernetesAppDeployer


# Singleton, built on first request so importing the app needs no cluster
_deployer: KubernetesAppDeployer | None = None


def get_deployer() -> KubernetesAppDeployer:
    global _deployer
    if _deployer is None:
        _deployer = build_deployer()
    return _deployer
