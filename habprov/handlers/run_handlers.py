import habprov.utils as utils
import habprov.options as options

handlers, runner = utils.handler_decorator()


def _join(*parts):
    return " ".join([p for p in parts if p])


def _package_target(package, platform):
    if package.get("artifact"):
        return platform.remote_join(platform.root_path, "results", package["artifact"])
    return package["ident"]


@runner("supervisor", "linux")
def linux_start_supervisor(config, platform, package):
    sup_options = options.supervisor_options(
        config, platform.root_path, platform.separator
    )
    return utils.left_pad(
        [
            "if sudo -E hab svc status >/dev/null 2>&1",
            "then",
            '  echo "Habitat Supervisor already running."',
            "else",
            "  {} > /tmp/hab-sup.log 2>&1 &".format(
                _join("sudo -E nohup hab sup run", sup_options)
            ),
            "fi",
            "until sudo -E hab svc status >/dev/null 2>&1",
            "do",
            "  sleep 1",
            "done",
        ]
    )


@runner("supervisor", "windows")
def windows_start_supervisor(config, platform, package):
    return utils.left_pad(
        [
            'if ((Get-Service -Name Habitat).Status -ne "Running") {',
            "  Start-Service -Name Habitat",
            "}",
            "do { Start-Sleep -Seconds 1 } until (hab svc status 2>$null)",
        ]
    )


@runner("user-toml", "linux")
def linux_copy_user_toml(config, platform, package):
    source = platform.remote_join(
        platform.root_path, "config", config["user_toml_name"]
    )
    target_dir = "/hab/user/{}/config".format(package["name"])
    return utils.left_pad(
        [
            "if [ -f {} ]".format(source),
            "then",
            "  sudo -E mkdir -p {}".format(target_dir),
            "  sudo -E cp {} {}/user.toml".format(source, target_dir),
            "fi",
        ]
    )


@runner("user-toml", "windows")
def windows_copy_user_toml(config, platform, package):
    source = platform.remote_join(
        platform.root_path, "config", config["user_toml_name"]
    )
    target_dir = "C:\\hab\\user\\{}\\config".format(package["name"])
    return utils.left_pad(
        [
            "if (Test-Path {}) {{".format(source),
            "  New-Item -Path {} -ItemType Directory -Force | Out-Null".format(
                target_dir
            ),
            "  Copy-Item {} {}\\user.toml -Force".format(source, target_dir),
            "}",
        ]
    )


@runner("package", "linux")
def linux_install_package(config, platform, package):
    return utils.left_pad(
        ["sudo -E hab pkg install {}".format(_package_target(package, platform))]
    )


@runner("package", "windows")
def windows_install_package(config, platform, package):
    return utils.left_pad(
        ["hab pkg install {}".format(_package_target(package, platform))]
    )


@runner("service", "linux")
def linux_load_service(config, platform, package):
    return utils.left_pad(
        [
            _join(
                "sudo -E hab svc load",
                package["ident"],
                options.service_options(config),
            )
        ]
    )


@runner("service", "windows")
def windows_load_service(config, platform, package):
    return utils.left_pad(
        [_join("hab svc load", package["ident"], options.service_options(config))]
    )
