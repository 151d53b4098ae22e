from __future__ import annotations
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, Optional


class AddHostView(ttk.Frame):
    """
    Entry + button for adding a host by address.
    The view holds no state beyond widgets; the app binds callbacks to the VM.
    """
    def __init__(self, master, *, on_submit: Callable[[str], None],
                 on_close: Optional[Callable[[], None]] = None):
        super().__init__(master, padding=12)
        self.on_submit = on_submit
        self.on_close = on_close

        self.columnconfigure(1, weight=1)

        ttk.Label(self, text="Host address:").grid(row=0, column=0, sticky="w", padx=(0, 8))
        self.host_var = tk.StringVar()
        self.entry = ttk.Entry(self, textvariable=self.host_var, width=40)
        self.entry.grid(row=0, column=1, sticky="ew")
        self.entry.bind("<Return>", self._on_submit)
        self.entry.bind("<KP_Enter>", self._on_submit)

        self.add_button = ttk.Button(self, text="Add Host", command=self._on_submit)
        self.add_button.grid(row=0, column=2, padx=(8, 0))

        hint = "Examples: 192.168.1.20, gaming-pc.local:47989, [fe80::1]"
        ttk.Label(self, text=hint, foreground="#666").grid(
            row=1, column=0, columnspan=3, sticky="w", pady=(6, 0)
        )

        self.status_var = tk.StringVar(value="")
        self.status = ttk.Label(self, textvariable=self.status_var, wraplength=420)
        self.status.grid(row=2, column=0, columnspan=3, sticky="w", pady=(10, 0))

        self.known_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.known_var, wraplength=420, foreground="#444").grid(
            row=4, column=0, columnspan=3, sticky="w", pady=(10, 0)
        )

        self.progress = ttk.Progressbar(self, mode="indeterminate", length=120)

        self.entry.focus_set()

    def _on_submit(self, event=None):
        self.on_submit(self.host_var.get())
        return "break"

    # ---- VM -> View ----
    def set_busy(self, busy: bool) -> None:
        if busy:
            self.progress.grid(row=3, column=0, columnspan=3, sticky="w", pady=(6, 0))
            self.progress.start(12)
        else:
            self.progress.stop()
            self.progress.grid_remove()

    def set_status(self, text: str) -> None:
        self.status_var.set(text)

    def set_known_hosts(self, text: str) -> None:
        self.known_var.set(text)

    def show_error(self, title: str, text: str) -> None:
        messagebox.showerror(title, text, parent=self)

    def show_info(self, title: str, text: str) -> None:
        messagebox.showinfo(title, text, parent=self)
