import habprov.utils as utils
import habprov.options as options

handlers, installer = utils.handler_decorator()

LINUX_INSTALL_URL = (
    "https://raw.githubusercontent.com/habitat-sh/habitat/master/components/hab/install.sh"
)
WINDOWS_INSTALL_URL = (
    "https://raw.githubusercontent.com/habitat-sh/habitat/master/components/hab/install.ps1"
)
DEFAULT_CHANNEL = "stable"


def _version(config):
    version = config.get("hab_version")
    if version is None or str(version) in ("", "latest"):
        return None
    return str(version)


@installer("hab-cli", "linux")
def linux_install_cmd(config, platform):
    version = _version(config)
    install = "sudo -E bash /tmp/install.sh"
    if version:
        install += " -v {}".format(version)
    return utils.left_pad(
        [
            "if command -v hab >/dev/null 2>&1",
            "then",
            '  echo "Habitat CLI already installed."',
            "else",
            "  curl -o /tmp/install.sh '{}'".format(LINUX_INSTALL_URL),
            "  {}".format(install),
            "fi",
        ]
    )


@installer("hab-cli", "windows")
def windows_install_cmd(config, platform):
    # install.ps1 takes the channel first and the version second
    channel, version = config.get("hab_channel"), _version(config)
    arguments = []
    if channel or version:
        arguments.append(channel or DEFAULT_CHANNEL)
    if version:
        arguments.append(version)
    invoke = "Invoke-Command -ScriptBlock ([scriptblock]::Create($InstallScript))"
    if arguments:
        invoke += " -ArgumentList {}".format(", ".join(arguments))
    return utils.left_pad(
        [
            "if ((Get-Command hab -ErrorAction Ignore).Path) {",
            '  Write-Output "Habitat CLI already installed."',
            "} else {",
            "  Set-ExecutionPolicy Bypass -Scope Process -Force",
            "  $InstallScript = ((New-Object System.Net.WebClient).DownloadString('{}'))".format(
                WINDOWS_INSTALL_URL
            ),
            "  {}".format(invoke),
            "}",
        ]
    )


@installer("hab-service", "windows")
def windows_install_service(config, platform):
    root = platform.root_path
    launcher_args = " ".join(
        ["--no-color", options.supervisor_options(config, root, platform.separator)]
    ).strip()
    return utils.left_pad(
        [
            "New-Item -Path {} -ItemType Directory -Force | Out-Null".format(root),
            "New-Item -Path {} -ItemType Directory -Force | Out-Null".format(
                platform.remote_join(root, "config")
            ),
            'if (!($env:Path | Select-String "Habitat")) {',
            '  $env:Path += ";C:\\ProgramData\\Habitat"',
            "}",
            "if (!(Get-Service -Name Habitat -ErrorAction Ignore)) {",
            "  hab license accept",
            '  Write-Output "Installing Habitat Windows Service"',
            "  hab pkg install core/windows-service",
            '  if ($(Get-Service -Name Habitat).Status -ne "Stopped") {',
            "    Stop-Service -Name Habitat",
            "  }",
            '  $HabSvcConfig = "c:\\hab\\svc\\windows-service\\HabService.dll.config"',
            "  [xml]$xmlDoc = Get-Content $HabSvcConfig",
            '  $obj = $xmlDoc.configuration.appSettings.add | where {$_.Key -eq "launcherArgs" }',
            '  $obj.value = "{}"'.format(launcher_args),
            "  $xmlDoc.Save($HabSvcConfig)",
            "  Start-Service -Name Habitat",
            "}",
        ]
    )


@installer("hab-service", "linux")
def linux_prepare_node(config, platform):
    root = platform.root_path
    results = platform.remote_join(root, "results")
    configdir = platform.remote_join(root, "config")
    return utils.left_pad(
        [
            "id -u hab >/dev/null 2>&1 || sudo -E useradd hab >/dev/null 2>&1",
            "sudo -E rm -rf {} {}".format(results, configdir),
            "mkdir -p {} {}".format(results, configdir),
        ]
    )


@installer("bldr-env", "linux")
def linux_bldr_env(config, platform):
    lines = []
    if config.get("depot_url"):
        lines.append("export HAB_BLDR_URL={}".format(config["depot_url"]))
    if config.get("hab_license"):
        lines.append("export HAB_LICENSE={}".format(config["hab_license"]))
    return utils.left_pad(lines) if lines else ""


@installer("bldr-env", "windows")
def windows_bldr_env(config, platform):
    lines = []
    if config.get("depot_url"):
        lines.append('$env:HAB_BLDR_URL = "{}"'.format(config["depot_url"]))
    if config.get("hab_license"):
        lines.append('$env:HAB_LICENSE = "{}"'.format(config["hab_license"]))
    return utils.left_pad(lines) if lines else ""
