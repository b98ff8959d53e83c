"""
Trigger Handler

Recurring triggers that re-invoke wallshow, implemented as systemd user timers. A trigger named
"wallshow-slideshow" is a pair of unit files in the user unit directory:

    wallshow-slideshow.service    Type=oneshot service running the command
    wallshow-slideshow.timer      monotonic timer activating the service every interval

The first tick fires one full interval after the timer is started. The timer never wakes the
machine. Missed ticks are coalesced into at most one: an elapse that falls while the system is
suspended fires once when it is available again. Ticks lost to a shutdown are caught up by one
tick a minute into the next user session (OnStartupSec), then every interval from there. That
startup tick fires on every session start, whether or not a tick was actually missed.

systemd reference: https://www.freedesktop.org/software/systemd/man/latest/systemd.timer.html
"""

import logging
import re
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


SERVICE_TEMPLATE = """\
[Unit]
Description=wallshow trigger {name}

[Service]
Type=oneshot
{environment}ExecStart={command}
"""

TIMER_TEMPLATE = """\
[Unit]
Description=wallshow trigger {name}, every {interval} minutes

[Timer]
OnActiveSec={interval}min
OnStartupSec=1min
OnUnitActiveSec={interval}min
AccuracySec=1s
WakeSystem=false
Unit={name}.service

[Install]
WantedBy=timers.target
"""


def environment_lines(environment: dict) -> str:
    """
    Environment= lines for a service unit. Each assignment is double quoted, so values may hold
    spaces; backslashes and quotes are escaped and % is doubled to stop specifier expansion.
    """

    lines = []

    for key, value in environment.items():
        value = str(value).replace("\\", "\\\\").replace('"', '\\"').replace("%", "%%")
        lines.append(f'Environment="{key}={value}"\n')

    return "".join(lines)


class TriggerError(OSError):
    """
    Raised when systemd refuses to register or reload a trigger.
    """

    pass


@dataclass(frozen=True)
class Trigger:
    name: str
    timer_path: Path
    service_path: Path

    @property
    def timer_unit(self) -> str:
        return self.timer_path.name

    @property
    def service_unit(self) -> str:
        return self.service_path.name


class SystemdTimerBinding:
    """
    Install, find and remove recurring triggers as systemd user timers in unit_dir.
    """

    def __init__(self, unit_dir: Path, systemctl: str = "systemctl"):
        self.unit_dir = Path(unit_dir)
        self.systemctl = systemctl

    def _trigger(self, name: str) -> Trigger:
        return Trigger(
            name=name,
            timer_path=self.unit_dir / f"{name}.timer",
            service_path=self.unit_dir / f"{name}.service",
        )

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:

        cmd = [self.systemctl, "--user", *args]
        logger.debug("running %s", shlex.join(cmd))

        try:
            return subprocess.run(cmd, text=True, check=check, capture_output=True)

        except subprocess.CalledProcessError as error:
            raise TriggerError(
                f"'{shlex.join(cmd)}' failed: {(error.stderr or '').strip() or error}"
            )

        except FileNotFoundError as error:
            raise TriggerError(f"Could not run {self.systemctl}: {error}")

    def install(
        self, name: str, command: list[str], interval: int, environment: dict = None
    ) -> Trigger:
        """
        Create (or overwrite) the trigger 'name' running command every interval minutes, starting
        one interval from now. environment is set for the command, e.g. {"WALLSHOW_CONFIG_DIR": ...}.
        """

        if interval < 1:
            raise ValueError(f"Trigger interval must be at least 1 minute, got {interval}.")

        trigger = self._trigger(name)

        try:
            self.unit_dir.mkdir(parents=True, exist_ok=True)
            trigger.service_path.write_text(
                SERVICE_TEMPLATE.format(
                    name=name,
                    command=shlex.join(command),
                    environment=environment_lines(environment or {}),
                )
            )
            trigger.timer_path.write_text(
                TIMER_TEMPLATE.format(name=name, interval=interval)
            )

        except OSError as error:
            raise TriggerError(f"Could not write units for trigger {name}: {error}")

        self._run("daemon-reload")
        # restart rather than start so an overwritten timer begins a fresh interval
        self._run("enable", trigger.timer_unit)
        self._run("restart", trigger.timer_unit)

        logger.info("installed trigger %s every %d minutes", name, interval)
        return trigger

    def find_all(self, pattern: str) -> list[Trigger]:
        """
        Return every trigger whose name matches the regular expression pattern.
        """

        if not self.unit_dir.is_dir():
            return []

        regex = re.compile(pattern)

        return [
            self._trigger(path.stem)
            for path in sorted(self.unit_dir.glob("*.timer"))
            if regex.search(path.stem)
        ]

    def remove(self, trigger: Trigger) -> None:
        """
        Stop and delete trigger. Removing a trigger that does not exist is not an error.
        """

        # systemctl exits non-zero for unknown units, which is fine here
        result = self._run("disable", "--now", trigger.timer_unit, check=False)
        if result.returncode != 0:
            logger.debug("disable %s: %s", trigger.timer_unit, result.stderr.strip())

        result = self._run("stop", trigger.service_unit, check=False)
        if result.returncode != 0:
            logger.debug("stop %s: %s", trigger.service_unit, result.stderr.strip())

        try:
            trigger.timer_path.unlink(missing_ok=True)
            trigger.service_path.unlink(missing_ok=True)

        except OSError as error:
            raise TriggerError(f"Could not delete units for trigger {trigger.name}: {error}")

        self._run("daemon-reload")
        logger.info("removed trigger %s", trigger.name)
