import logging

from habprov import HabitatProvisioner, Platform
from habprov.config import ProvisionerSettings
from habprov.logutils import setup_logging_topic


def test_topic_file_logging(tmpdir):
    settings = ProvisionerSettings({"log_directory": str(tmpdir)})
    provisioner = HabitatProvisioner(
        {}, platform=Platform("fooos-99"), suite="suitey", settings=settings
    )
    before = list(logging.getLogger("habprov.suitey.install").handlers)
    provisioner.install_command()
    logfile = tmpdir.join("suitey.install.log")
    assert logfile.check()
    assert "installing Habitat CLI on fooos-99" in logfile.read()
    assert logging.getLogger("habprov.suitey.install").handlers == before


def test_every_phase_has_a_topic(tmpdir):
    settings = ProvisionerSettings({"log_directory": str(tmpdir)})
    provisioner = HabitatProvisioner(
        {}, platform=Platform("fooos-99"), suite="phases", settings=settings
    )
    for phase in ["install", "init", "prepare", "run"]:
        getattr(provisioner, "{}_command".format(phase))()
        assert tmpdir.join("phases.{}.log".format(phase)).check()


def test_foreign_handlers_are_kept(tmpdir):
    log = logging.getLogger("habprov.foreign.run")
    foreign = logging.NullHandler()
    log.addHandler(foreign)
    try:
        settings = ProvisionerSettings({"log_directory": str(tmpdir)})
        with setup_logging_topic(
            settings, {"name": "foreign"}, "run", return_logger=True
        ) as topiclog:
            topiclog.info("still logged to file")
            assert foreign in topiclog.handlers
        assert "still logged to file" in tmpdir.join("foreign.run.log").read()
        assert log.handlers == [foreign]
    finally:
        log.removeHandler(foreign)


def test_logging_disabled():
    settings = ProvisionerSettings({"logging": False})
    before = list(logging.getLogger("habprov.quiet.run").handlers)
    with setup_logging_topic(settings, {"name": "quiet"}, "run", return_logger=True) as log:
        assert log.handlers == before
        assert log.name == "habprov.quiet.run"


def test_return_logger_off():
    settings = ProvisionerSettings()
    with setup_logging_topic(settings, {"name": "x"}, "run") as log:
        assert log is None


def test_custom_logging_handler(monkeypatch):
    import habprov_testplugin

    monkeypatch.setenv("HABPROV_LOGGING_HANDLER", "habprov_testplugin:attach_handler")
    settings = ProvisionerSettings()
    before = list(logging.getLogger("habprov.custom.init").handlers)
    with setup_logging_topic(settings, {"name": "custom"}, "init", return_logger=True) as log:
        assert len(log.handlers) == len(before) + 1
    assert "init" in habprov_testplugin.recorded_topics
    assert log.handlers == before
