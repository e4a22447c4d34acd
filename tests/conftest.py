import pytest
from habprov import HabitatProvisioner, Platform
from habprov.config import ProvisionerSettings


@pytest.fixture()
def linux_platform():
    return Platform("fooos-99")


@pytest.fixture()
def windows_platform():
    return Platform("windows-2019")


@pytest.fixture()
def quiet_settings():
    return ProvisionerSettings({"logging": False})


@pytest.fixture()
def linux_provisioner(linux_platform, quiet_settings):
    def make(config=None, suite="suitey"):
        return HabitatProvisioner(
            config or {}, platform=linux_platform, suite=suite, settings=quiet_settings
        )

    return make


@pytest.fixture()
def windows_provisioner(windows_platform, quiet_settings):
    def make(config=None, suite="suitey"):
        return HabitatProvisioner(
            config or {}, platform=windows_platform, suite=suite, settings=quiet_settings
        )

    return make


@pytest.fixture()
def kitchen_root(tmpdir):
    tmpdir.join("results").ensure(dir=True)
    tmpdir.join("habitat", "config").ensure(dir=True)
    tmpdir.join("habitat", "config", "user.toml").write('port = "8080"\n')
    return tmpdir
