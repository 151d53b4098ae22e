# hostlink/app/main.py
from __future__ import annotations
import logging
import tkinter as tk
from typing import Optional

from .add_host_controller import AddHostController
from .polling_scheduler import PollingScheduler
from .views.add_host_view import AddHostView
from .wiring import build_add_host, build_add_service, load_settings, open_storage
from ..domain.outcomes import AddOutcome
from ..domain.ports import UseCaseError
from ..usecases.error_mapping import OutcomeMessage
from ..viewmodels.add_host_vm import AddHostVM
from ..utils import logging as logging_utils

logging_utils.configure_root()


class App:
    """Bootstrap: wire the add-host view <-> VM, controller, and adapters."""

    def __init__(self, root: Optional[tk.Tk] = None, data_dir: Optional[str] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.root = root or tk.Tk()
        self.root.title("Add Host Manually")
        self.root.protocol("WM_DELETE_WINDOW", self.shutdown)

        # ---- Settings & storage ----
        self.storage = open_storage(data_dir)
        self.settings_vm = load_settings(self.storage)
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Log level %s", logging.getLevelName(level))

        # ---- ViewModel ----
        self.add_host_vm = AddHostVM(on_message=self._show_message)

        # ---- View ----
        self.view = AddHostView(self.root, on_submit=self._on_submit, on_close=self.shutdown)
        self.view.pack(fill="both", expand=True)

        # ---- Controller (one worker per session) ----
        self.scheduler = PollingScheduler(self.root.after, self.root.after_cancel)
        self.add_service = build_add_service(self.settings_vm, self.storage)
        self.add_host_vm.set_known_hosts(h.address.netloc for h in self.add_service.known_hosts())
        self.controller = AddHostController(
            add_host=build_add_host(self.settings_vm, add_service=self.add_service),
            scheduler=self.scheduler,
            on_outcome=self._on_outcome,
        )
        self.add_host_vm.on_submit = self.controller.submit
        self.controller.open()
        self._refresh()

    def _on_submit(self, text: str) -> None:
        self.add_host_vm.set_host_text(text)
        try:
            self.add_host_vm.cmd_submit()
        except UseCaseError as err:
            self.view.show_info("Add Host", err.message)
            return
        self._refresh()

    def _on_outcome(self, outcome: AddOutcome) -> None:
        self.add_host_vm.apply_outcome(outcome)
        if not self.controller.is_open:
            return
        self._refresh()

    def _show_message(self, message: OutcomeMessage) -> None:
        if message.level == "error":
            self.view.show_error(message.title, message.text)
            return
        self.view.show_info(message.title, message.text)
        if message.close_dialog and not self.add_host_vm.busy:
            self.shutdown()

    def _refresh(self) -> None:
        self.view.set_busy(self.add_host_vm.busy)
        self.view.set_status(self.add_host_vm.status_text())
        self.view.set_known_hosts(self.add_host_vm.known_hosts_text())

    def shutdown(self) -> None:
        """Tear the session down; blocks until the worker thread exited."""
        self.controller.close()
        self.scheduler.cancel_all()
        try:
            self.root.destroy()
        except tk.TclError:
            pass

    def run(self) -> None:
        self.root.mainloop()


def main() -> None:
    App().run()


if __name__ == "__main__":
    main()
