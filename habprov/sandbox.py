import os
import glob
import shutil
import logging

import habprov.utils as utils
from .errors import ProvisionerError

log = logging.getLogger(__name__)


def kitchen_root(config):
    return config.get("kitchen_root") or os.getcwd()


def results_directory(config):
    resultsdir = config.get("results_directory") or "results"
    return os.path.join(kitchen_root(config), resultsdir)


def latest_artifact(resultsdir):
    """
    the artifact of the most recent local build. prefers what `hab pkg build`
    recorded in last_build.env and falls back to the newest .hart file.
    """
    envfile = os.path.join(resultsdir, "last_build.env")
    if os.path.isfile(envfile):
        artifact = utils.parse_env_file(envfile).get("pkg_artifact")
        if artifact and os.path.isfile(os.path.join(resultsdir, artifact)):
            return artifact
        log.warning("last_build.env does not point to an existing artifact")

    harts = glob.glob(os.path.join(resultsdir, "*.hart"))
    if not harts:
        return None
    return os.path.basename(max(harts, key=os.path.getmtime))


def resolve_artifact(config):
    """
    returns the file name of the local artifact to upload, or None if the
    package is to be installed from the depot.
    """
    resultsdir = results_directory(config)
    if config.get("artifact_name"):
        artifact = config["artifact_name"]
        if not os.path.isfile(os.path.join(resultsdir, artifact)):
            raise ProvisionerError(
                "artifact {} not found in {}".format(artifact, resultsdir)
            )
        return artifact
    if config.get("install_latest_artifact"):
        artifact = latest_artifact(resultsdir)
        if not artifact:
            raise ProvisionerError("no artifacts found in {}".format(resultsdir))
        return artifact
    return None


class Sandbox(object):
    """
    local directory mirroring what ends up in the node's root path:
    a config/ and a results/ subdirectory
    """

    def __init__(self, path):
        self.path = os.path.realpath(path)

    def __repr__(self):
        return "<Sandbox {}>".format(self.path)

    @property
    def configdir(self):
        return os.path.join(self.path, "config")

    @property
    def resultsdir(self):
        return os.path.join(self.path, "results")

    def ensure(self):
        for d in [self.configdir, self.resultsdir]:
            utils.mkdir_p(d)

    def reset(self):
        """
        empties config/ and results/. anything else in the directory belongs
        to the user and is left alone.
        """
        for d in [self.configdir, self.resultsdir]:
            if os.path.isdir(d):
                shutil.rmtree(d)
            elif os.path.exists(d):
                os.remove(d)
        self.ensure()

    def remove(self):
        for d in [self.configdir, self.resultsdir]:
            if os.path.isdir(d):
                shutil.rmtree(d)

    def copy_config(self, config):
        source = config_source(config)
        if not source:
            return
        if not os.path.isdir(source):
            raise ProvisionerError("config directory {} does not exist".format(source))
        log.debug("copying config from %s to %s", source, self.configdir)
        for name in os.listdir(source):
            src = os.path.join(source, name)
            dst = os.path.join(self.configdir, name)
            if os.path.isdir(src):
                shutil.copytree(src, dst)
            else:
                shutil.copy2(src, dst)

    def copy_artifact(self, config, artifact):
        source = os.path.join(results_directory(config), artifact)
        log.debug("copying artifact %s to %s", source, self.resultsdir)
        shutil.copy2(source, os.path.join(self.resultsdir, artifact))


def config_source(config):
    configdir = config.get("config_directory")
    if not configdir:
        return None
    return os.path.join(kitchen_root(config), configdir)


def check_overlap(sandbox, config):
    sources = [(sandbox.resultsdir, results_directory(config))]
    if config_source(config):
        sources.append((sandbox.configdir, config_source(config)))
    for target, source in sources:
        if os.path.isdir(source) and os.path.realpath(source) == target:
            raise ProvisionerError(
                "sandbox {} would overwrite its own source {}".format(
                    sandbox.path, source
                )
            )


def create_sandbox(config, sandbox_path):
    sandbox = Sandbox(sandbox_path)
    check_overlap(sandbox, config)
    sandbox.reset()
    sandbox.copy_config(config)
    artifact = resolve_artifact(config)
    if artifact:
        sandbox.copy_artifact(config, artifact)
    return artifact
