import importlib
import os


def enable_plugins(modules=None):
    plugin_modules = list(modules or [])
    fromenv = os.environ.get("HABPROV_PLUGINS", "")
    if fromenv:
        plugin_modules += fromenv.split(",")
    for plugin in plugin_modules:
        importlib.import_module(plugin)
    return plugin_modules
