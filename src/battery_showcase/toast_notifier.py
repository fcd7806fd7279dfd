from pathlib import Path

from win11toast import notify

from .constants import APP_NAME
from .notifier_utils import Duration, Notifier, Placement


# Windows toasts are always placed by the shell, placement is only logged
class ToastNotifier(Notifier):
    def _render(self, message: str, placement: Placement, duration: Duration) -> None:
        self.log.debug(f"Toast placement hint ignored by the shell: {placement!r}")
        notify(APP_NAME, message, duration=duration.value)


def notify_error(e: Exception, log_path: str):
    notify(
        f"{APP_NAME}: Error",
        f"{type(e).__name__}: {str(e)}",
        button={
            "activationType": "protocol",
            "arguments": "vscode://file/" + str(Path(log_path).expanduser().absolute()),
            "content": "Open logs in VSCode",
        },
    )
