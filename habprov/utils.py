import os
import errno
import shlex


def handler_decorator():
    handlers = {}

    def decorator(name, implementation="default"):
        def wrap(func):
            handlers.setdefault(name, {})[implementation] = func
            return func

        return wrap

    return handlers, decorator


def mkdir_p(path):
    # http://stackoverflow.com/questions/600268/mkdir-p-functionality-in-python
    try:
        os.makedirs(path)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(path):
            pass
        else:
            raise


def left_pad(lines, pad=8):
    """
    indent every line so the snippet can be dropped into a heredoc of the
    surrounding remote command. the result always ends in a newline.
    """
    return "\n".join([" " * pad + line for line in lines]) + "\n"


def wrap_shell_code(code, platform):
    if platform.windows():
        return code
    return "sh -c {}".format(shlex.quote("\n" + code))


def package_ident(origin, name, version=None, release=None):
    parts = [origin, name]
    if version:
        parts.append(version)
        if release:
            parts.append(release)
    return "/".join(parts)


def parse_env_file(path):
    """
    parse the KEY=VALUE file `hab pkg build` leaves in results/last_build.env
    """
    data = {}
    with open(path) as envfile:
        for line in envfile:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, _, value = line.partition("=")
            data[key.strip()] = value.strip().strip("\"'")
    return data
