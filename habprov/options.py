"""
command line flags for `hab sup run` and `hab svc load`.

flags are emitted in the order of the key tables below, whatever order the
configuration mapping happens to have. unset keys contribute nothing.
"""

SUPERVISOR_LISTEN_FLAGS = [
    ("hab_sup_listen_ctl", "--listen-ctl"),
    ("hab_sup_listen_gossip", "--listen-gossip"),
    ("hab_sup_listen_http", "--listen-http"),
]

SUPERVISOR_EVENT_STREAM_FLAGS = [
    ("hab_sup_event_stream_application", "--event-stream-application"),
    ("hab_sup_event_stream_environment", "--event-stream-environment"),
    ("hab_sup_event_stream_site", "--event-stream-site"),
    ("hab_sup_event_stream_url", "--event-stream-url"),
    ("hab_sup_event_stream_token", "--event-stream-token"),
]

SERVICE_FLAGS = [
    ("service_topology", "--topology"),
    ("service_update_strategy", "--strategy"),
    ("channel", "--channel"),
    ("service_group", "--group"),
]


def _value_flags(config, table):
    flags = []
    for key, flag in table:
        value = config.get(key)
        if value is not None and value != "":
            flags.append("{} {}".format(flag, value))
    return flags


def _repeated_flags(config, key, flag):
    values = config.get(key) or []
    if isinstance(values, str):
        values = [values]
    return ["{} {}".format(flag, x) for x in values]


def supervisor_options(config, root_path="/tmp/kitchen", separator="/"):
    flags = []
    flags += _value_flags(config, SUPERVISOR_LISTEN_FLAGS)
    if config.get("override_package_config"):
        flags.append(
            "--config-from {}".format(separator.join([root_path, "config", ""]))
        )
    flags += _repeated_flags(config, "hab_sup_peer", "--peer")
    flags += _value_flags(config, [("hab_sup_ring", "--ring")])
    flags += _value_flags(config, SUPERVISOR_EVENT_STREAM_FLAGS)
    flags += _value_flags(config, [("channel", "--channel")])
    return " ".join(flags)


def service_options(config):
    flags = _value_flags(config, SERVICE_FLAGS)
    flags += _repeated_flags(config, "service_binds", "--bind")
    return " ".join(flags)
