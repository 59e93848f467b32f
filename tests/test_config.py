#tests\test_config.py

"""Test deployer settings validation."""

import pytest
from pydantic import ValidationError

from kube_deployer.config import DeployerSettings


class TestEnvironmentVariables:
    """Test the environment_variables setting."""

    def test_valid_entries(self):
        settings = DeployerSettings(_env_file=None, environment_variables=["A=1", "B="])

        assert settings.environment_variables == ["A=1", "B="]

    @pytest.mark.parametrize("entry", ["NOVALUE", "=value", " =value"])
    def test_malformed_entry_rejected(self, entry):
        with pytest.raises(ValidationError):
            DeployerSettings(_env_file=None, environment_variables=[entry])
