import os
import json
import logging

import click
import jsonschema

import habprov.config as hconfig
from .errors import ProvisionerError
from .plugins import enable_plugins
from .platforms import Platform
from .provisioner import HabitatProvisioner

log = logging.getLogger(__name__)

PHASES = ["install", "init", "prepare", "run"]


def build_provisioner(configfile, parameter, platform, suite, validate, verbosity):
    config = hconfig.load_config_file(configfile, parameter, validate=validate)
    return HabitatProvisioner(
        config,
        platform=Platform(platform),
        suite=suite,
        settings=hconfig.ProvisionerSettings({"logging_level": verbosity}),
        validate=validate,
    )


@click.command()
@click.argument("phase", type=click.Choice(PHASES + ["all"]))
@click.argument("configfile", required=False)
@click.option("--parameter", "-p", multiple=True)
@click.option("--platform", default="linux")
@click.option("-s", "--suite", default=None)
@click.option("--plugin", multiple=True)
@click.option("-v", "--verbosity", default="ERROR")
@click.option("--validate/--no-validate", default=True)
def rendercli(phase, configfile, parameter, platform, suite, plugin, verbosity, validate):
    logging.basicConfig(level=getattr(logging, verbosity))
    enable_plugins(list(plugin))

    try:
        provisioner = build_provisioner(
            configfile, parameter, platform, suite, validate, verbosity
        )
        phases = PHASES if phase == "all" else [phase]
        for p in phases:
            command = getattr(provisioner, "{}_command".format(p))()
            log.debug("rendered %s command for %s", p, provisioner)
            click.echo(command)
    except jsonschema.exceptions.ValidationError as e:
        click.echo(e)
        raise click.ClickException(click.style("configuration not valid", fg="red"))
    except ProvisionerError as e:
        raise click.ClickException(str(e))


@click.command()
@click.argument("configfile")
@click.option("--parameter", "-p", multiple=True)
@click.option("--show/--no-show", default=False)
def validatecli(configfile, parameter, show):
    try:
        config = hconfig.load_config_file(configfile, parameter, validate=True)
        if show:
            click.echo(json.dumps(config, indent=2, sort_keys=True))
        else:
            click.secho("provisioner configuration is valid", fg="green")
    except jsonschema.exceptions.ValidationError as e:
        click.echo(e)
        raise click.ClickException(
            click.style("provisioner configuration not valid", fg="red")
        )


@click.command()
@click.argument("configfile")
@click.argument("directory")
@click.option("--parameter", "-p", multiple=True)
@click.option("-s", "--suite", default=None)
@click.option("-v", "--verbosity", default="ERROR")
def sandboxcli(configfile, directory, parameter, suite, verbosity):
    logging.basicConfig(level=getattr(logging, verbosity))
    try:
        provisioner = build_provisioner(
            configfile, parameter, "linux", suite, True, verbosity
        )
        provisioner.create_sandbox(os.path.realpath(directory))
    except jsonschema.exceptions.ValidationError as e:
        raise click.ClickException(e.message)
    except ProvisionerError as e:
        raise click.ClickException(str(e))
    click.secho("sandbox: {}".format(provisioner.sandbox_path), fg="green")
    if provisioner.artifact:
        click.secho("artifact: {}".format(provisioner.artifact))
