import os
import logging
import importlib
import contextlib

LOGFORMAT = "%(asctime)s | %(name)20.20s | %(levelname)6s | %(message)s"
formatter = logging.Formatter(LOGFORMAT)


def get_topic_loggername(metadata, topic):
    return "habprov.{}.{}".format(metadata["name"], topic)


def default_logging_handlers(settings, log, metadata, topic):
    sh = logging.StreamHandler()
    sh.setLevel(getattr(logging, settings.stream_loglevel()))
    sh.setFormatter(formatter)
    log.addHandler(sh)

    logdir = settings.log_directory()
    if logdir:
        logname = os.path.join(logdir, "{}.{}.log".format(metadata["name"], topic))
        fh = logging.FileHandler(logname)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        log.addHandler(fh)
        log.info("starting file logging for topic: %s", topic)


@contextlib.contextmanager
def setup_logging_topic(settings, metadata, topic, return_logger=False):
    """
    a context manager for logging one provisioner phase (install, run, ...)
    handlers are closed again when the phase is done so that repeated
    provisioning in one process does not pile up open log files.
    """

    log = logging.getLogger(get_topic_loggername(metadata, topic))
    log.setLevel(logging.DEBUG)
    log.propagate = False

    existing = list(log.handlers)
    if not settings.disable_logging():
        customhandlers = settings.custom_logging_handler()
        if customhandlers:
            module, func = customhandlers.split(":")
            m = importlib.import_module(module)
            f = getattr(m, func)
            f(log, metadata, topic)
        else:
            default_logging_handlers(settings, log, metadata, topic)

    # only the handlers attached here are ours to close
    added = [h for h in log.handlers if h not in existing]

    try:
        yield log if return_logger else None
    finally:
        for h in added:
            h.close()
            log.removeHandler(h)
