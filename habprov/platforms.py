class Platform(object):
    """
    the node a suite is converged on, as far as script generation cares:
    which shell family to emit and where the sandbox lands remotely.
    """

    def __init__(self, name, os_type=None, shell_type=None):
        self.name = name
        if os_type is None:
            os_type = "windows" if name.lower().startswith("win") else "unix"
        if shell_type is None:
            shell_type = "powershell" if os_type == "windows" else "bourne"
        self.os_type = os_type
        self.shell_type = shell_type

    def __repr__(self):
        return "<Platform {} os: {} shell: {}>".format(
            self.name, self.os_type, self.shell_type
        )

    def windows(self):
        return self.os_type == "windows"

    @property
    def implementation(self):
        return "windows" if self.windows() else "linux"

    @property
    def separator(self):
        return "\\" if self.windows() else "/"

    @property
    def root_path(self):
        if self.windows():
            return "C:\\Windows\\Temp\\kitchen"
        return "/tmp/kitchen"

    def remote_join(self, *parts):
        return self.separator.join(parts)
