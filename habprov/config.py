import copy
import json
import os
import logging

import yaml
from jsonschema import Draft4Validator, validators

log = logging.getLogger(__name__)

schemadir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas")


def extend_with_default(validator_class):
    validate_properties = validator_class.VALIDATORS["properties"]

    def set_defaults(validator, properties, instance, schema):
        if isinstance(instance, dict):
            for prop, subschema in properties.items():
                if "default" in subschema:
                    instance.setdefault(prop, copy.deepcopy(subschema["default"]))

        for error in validate_properties(validator, properties, instance, schema):
            yield error

    return validators.extend(validator_class, {"properties": set_defaults})


DefaultValidatingDraft4Validator = extend_with_default(Draft4Validator)


def validator(schema_name="provisioner-schema", schemasource=None):
    relpath = "{}/{}.json".format(schemasource or schemadir, schema_name)
    with open(relpath) as schemafile:
        schema = json.load(schemafile)
    return DefaultValidatingDraft4Validator(schema)


def load_config(config, validate=True, schemasource=None):
    """
    returns a copy of the provisioner configuration with all defaults filled in.
    defaults are always applied, the type checks only when validate is set.
    """
    config = copy.deepcopy(dict(config or {}))
    v = validator(schemasource=schemasource)
    if validate:
        v.validate(config)
    else:
        for error in v.iter_errors(config):
            log.debug("ignoring invalid configuration: %s", error.message)
    return config


def getinit_data(configfiles, overrides):
    """
    get configuration from both a list of files and a list of 'key=value'
    strings as they are passed in the command line <value> is assumed to be a
    YAML parsable string.
    """
    initdata = {}
    for configfile in configfiles:
        with open(configfile) as f:
            initdata.update(**(yaml.safe_load(f) or {}))

    for x in overrides:
        key, value = x.split("=", 1)
        initdata[key] = yaml.safe_load(value)
    return initdata


def load_config_file(path, overrides=(), validate=True, schemasource=None):
    configfiles = [path] if path else []
    return load_config(
        getinit_data(configfiles, overrides),
        validate=validate,
        schemasource=schemasource,
    )


class HandlerConfig(object):
    def __init__(self, **kwargs):
        self.handler_selection = kwargs
        fromenv = os.environ.get("HABPROV_HANDLERCONFIG", None)
        if fromenv:
            with open(fromenv) as f:
                override = yaml.safe_load(f)
            self.handler_selection.update(**override)

    def get_impl(self, category, handler, default="default"):
        try:
            return self.handler_selection[category][handler]
        except KeyError:
            return default


class ProvisionerSettings(object):
    def __init__(self, config=None):
        self.config = config or {}

    def disable_logging(self):
        if "HABPROV_LOGGING_DISABLE" in os.environ:
            return yaml.safe_load(os.environ.get("HABPROV_LOGGING_DISABLE", "false"))
        return not self.config.get("logging", True)

    def custom_logging_handler(self):
        return os.environ.get("HABPROV_LOGGING_HANDLER")

    def stream_loglevel(self):
        if "HABPROV_LOGGING_STREAM_LEVEL" in os.environ:
            return os.environ.get("HABPROV_LOGGING_STREAM_LEVEL", "INFO")
        return self.config.get("logging_level", "INFO")

    def log_directory(self):
        return os.environ.get("HABPROV_LOGDIR", self.config.get("log_directory"))
