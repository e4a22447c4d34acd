import os
import shutil
import logging
import tempfile

import habprov.utils as utils
import habprov.options as options
import habprov.logutils as logutils
import habprov.sandbox as sandbox
from .config import load_config, HandlerConfig, ProvisionerSettings
from .errors import ProvisionerError
from .platforms import Platform
from .handlers.install_handlers import handlers as install_handlers
from .handlers.run_handlers import handlers as run_handlers

log = logging.getLogger(__name__)

API_VERSION = 2


class HabitatProvisioner(object):
    """
    builds the commands the host framework runs on a test node to install
    the Habitat CLI and supervisor and to load the package under test.

    nothing is executed here. every *_command method returns a string that is
    ready to be handed to the transport.
    """

    def __init__(
        self,
        config=None,
        platform=None,
        suite=None,
        handler_config=None,
        settings=None,
        validate=True,
    ):
        self.config = load_config(config, validate=validate)
        self.platform = platform or Platform("linux")
        self.suite = suite
        self.handler_config = handler_config or HandlerConfig()
        self.settings = settings or ProvisionerSettings()
        self.sandbox_path = None
        self.artifact = None
        self._owns_sandbox = False

    def __repr__(self):
        return "<HabitatProvisioner suite: {} platform: {}>".format(
            self.suite, self.platform.name
        )

    @property
    def metadata(self):
        return {"name": self.suite or "habprov"}

    def diagnose_plugin(self):
        from . import __version__

        return {
            "name": "Habitat",
            "class": type(self).__name__,
            "version": __version__,
            "api_version": API_VERSION,
        }

    def package_name(self):
        name = self.config.get("package_name") or self.suite
        if not name:
            raise ProvisionerError("package_name is not set and there is no suite")
        return name

    def package_ident(self):
        return utils.package_ident(
            self.config["package_origin"],
            self.package_name(),
            self.config.get("package_version") and str(self.config["package_version"]),
            self.config.get("package_release") and str(self.config["package_release"]),
        )

    def package(self):
        artifact = self.artifact
        if artifact is None and self.sandbox_path is None:
            artifact = self.config.get("artifact_name")
        return {
            "name": self.package_name(),
            "ident": self.package_ident(),
            "artifact": artifact,
        }

    def _handler(self, registry, category, name):
        impl = self.handler_config.get_impl(
            category, name, self.platform.implementation
        )
        try:
            return registry[name][impl]
        except KeyError:
            raise ProvisionerError(
                "no {} handler {} for platform {} ({})".format(
                    category, name, self.platform.name, impl
                )
            )

    def _install_script(self, name):
        handler = self._handler(install_handlers, "install", name)
        return handler(self.config, self.platform)

    def _run_script(self, name):
        handler = self._handler(run_handlers, "run", name)
        return handler(self.config, self.platform, self.package())

    def linux_install_cmd(self):
        return install_handlers["hab-cli"]["linux"](self.config, self.platform)

    def windows_install_cmd(self):
        return install_handlers["hab-cli"]["windows"](self.config, self.platform)

    def windows_install_service(self):
        return install_handlers["hab-service"]["windows"](self.config, self.platform)

    def install_cmd(self):
        return self._install_script("hab-cli")

    def supervisor_options(self):
        return options.supervisor_options(
            self.config, self.platform.root_path, self.platform.separator
        )

    def service_options(self):
        return options.service_options(self.config)

    def _wrap(self, scripts):
        return utils.wrap_shell_code("".join(scripts), self.platform)

    def install_command(self):
        with logutils.setup_logging_topic(
            self.settings, self.metadata, "install", return_logger=True
        ) as plog:
            plog.info("installing Habitat CLI on %s", self.platform.name)
            return self._wrap(
                [self._install_script("bldr-env"), self._install_script("hab-cli")]
            )

    def init_command(self):
        with logutils.setup_logging_topic(
            self.settings, self.metadata, "init", return_logger=True
        ) as plog:
            plog.info("preparing %s for Habitat", self.platform.name)
            return self._wrap([self._install_script("hab-service")])

    def prepare_command(self):
        with logutils.setup_logging_topic(
            self.settings, self.metadata, "prepare", return_logger=True
        ) as plog:
            plog.info(
                "applying %s on %s", self.config["user_toml_name"], self.platform.name
            )
            return self._wrap([self._run_script("user-toml")])

    def run_command(self):
        with logutils.setup_logging_topic(
            self.settings, self.metadata, "run", return_logger=True
        ) as plog:
            package = self.package()
            plog.info(
                "loading %s (artifact: %s)",
                package["ident"],
                package["artifact"] or "none",
            )
            plog.debug("supervisor options: %s", self.supervisor_options())
            plog.debug("service options: %s", self.service_options())
            return self._wrap(
                [
                    self._install_script("bldr-env"),
                    self._run_script("supervisor"),
                    self._run_script("package"),
                    self._run_script("service"),
                ]
            )

    def create_sandbox(self, sandbox_path=None):
        self.cleanup_sandbox()
        self._owns_sandbox = sandbox_path is None
        self.sandbox_path = sandbox_path or tempfile.mkdtemp(prefix="habprov-")
        with logutils.setup_logging_topic(
            self.settings, self.metadata, "sandbox", return_logger=True
        ) as plog:
            plog.info("creating sandbox in %s", self.sandbox_path)
            try:
                self.artifact = sandbox.create_sandbox(self.config, self.sandbox_path)
            except ProvisionerError:
                plog.exception("sandbox creation failed")
                raise
        return self.sandbox_path

    def cleanup_sandbox(self):
        """
        a sandbox in a directory the caller handed in only loses its config/
        and results/ subdirectories, a temporary one is removed entirely.
        """
        if self.sandbox_path and os.path.exists(self.sandbox_path):
            log.debug("removing sandbox %s", self.sandbox_path)
            if self._owns_sandbox:
                shutil.rmtree(self.sandbox_path)
            else:
                sandbox.Sandbox(self.sandbox_path).remove()
        self.sandbox_path = None
        self.artifact = None
        self._owns_sandbox = False
