"""
KubeConfigManager tests. The kubernetes config loaders are mocked.
"""

from unittest.mock import MagicMock, patch

import pytest
from kubernetes.config import ConfigException

from logical_cluster_manager.common.config import settings
from logical_cluster_manager.common.exception import ConfigurationError
from logical_cluster_manager.control_plane.config import KubeConfigManager


MODULE = "logical_cluster_manager.control_plane.config"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("KUBECONFIG", raising=False)
    monkeypatch.setattr(settings, "KUBECONFIG", None)
    monkeypatch.setattr(settings, "KUBE_CONTEXT", None)


@pytest.fixture
def kubeconfig(tmp_path):
    path = tmp_path / "kubeconfig"
    path.write_text("apiVersion: v1\nkind: Config\n", encoding="utf-8")
    return path


class TestFindConfigFile:

    def test_explicit_path(self, kubeconfig):
        assert KubeConfigManager(str(kubeconfig)).find_config_file() == str(kubeconfig)

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            KubeConfigManager(str(tmp_path / "missing")).find_config_file()

    def test_settings_path(self, kubeconfig, monkeypatch):
        monkeypatch.setattr(settings, "KUBECONFIG", str(kubeconfig))
        assert KubeConfigManager().find_config_file() == str(kubeconfig)

    def test_env_path(self, kubeconfig, tmp_path, monkeypatch):
        monkeypatch.setenv("KUBECONFIG", f"{kubeconfig}:{tmp_path / 'other'}")
        assert KubeConfigManager().find_config_file() == str(kubeconfig)

    def test_nothing_found(self):
        assert KubeConfigManager().find_config_file() is None


class TestCreateClient:

    def test_kubeconfig_client(self, kubeconfig):
        api_client = MagicMock()
        with patch(f"{MODULE}.config.new_client_from_config", return_value=api_client) as loader:
            result = KubeConfigManager(str(kubeconfig), context="prod").create_api_client()

        loader.assert_called_once_with(config_file=str(kubeconfig), context="prod")
        assert result is api_client

    def test_context_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "KUBE_CONTEXT", "staging")
        assert KubeConfigManager().context == "staging"

    def test_invalid_kubeconfig(self, kubeconfig):
        with patch(f"{MODULE}.config.new_client_from_config", side_effect=ConfigException("bad")):
            with pytest.raises(ConfigurationError):
                KubeConfigManager(str(kubeconfig)).create_api_client()

    def test_in_cluster_fallback(self):
        with patch(f"{MODULE}.config.load_incluster_config") as loader, \
                patch(f"{MODULE}.client.ApiClient") as api_client_cls:
            result = KubeConfigManager().create_api_client()

        loader.assert_called_once()
        assert result is api_client_cls.return_value

    def test_no_configuration_available(self):
        with patch(f"{MODULE}.config.load_incluster_config", side_effect=ConfigException("not in cluster")):
            with pytest.raises(ConfigurationError):
                KubeConfigManager().create_api_client()

    def test_create_core_api(self, kubeconfig):
        with patch(f"{MODULE}.config.new_client_from_config") as loader, \
                patch(f"{MODULE}.client.CoreV1Api") as core_api_cls:
            result = KubeConfigManager(str(kubeconfig)).create_core_api()

        core_api_cls.assert_called_once_with(loader.return_value)
        assert result is core_api_cls.return_value
