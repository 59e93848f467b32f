# kube_deployer/run_api.py
"""Run the deployer HTTP API."""

import logging

import uvicorn

from kube_deployer.api.main import app
from kube_deployer.config import DeployerSettings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = DeployerSettings()
    host, port = settings.api_host, settings.api_port

    logger.info(f"Starting Kubernetes App Deployer API on {host}:{port}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
