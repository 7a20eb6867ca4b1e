"""
Main application window — Timetable Substitution Planner.

Tabs:
  1. Dashboard      — teachers free right now; refreshes itself on a timer
  2. Substitutions  — pick a day and absent teachers, generate / reset a plan,
                      export it as CSV or JSON
  3. Day            — every class on one day, substitutions overlaid
  4. Class          — one class across the week
  5. Teacher        — one teacher's classes and cover duty across the week

The bundled school timetable and rules are loaded at start-up.
  File -> Open timetable...  replace the timetable text file
  File -> Open rules...      replace the rules JSON
  File -> Export full timetable...  base timetable as CSV, for printing

Shortcuts:  Ctrl+1 .. Ctrl+5 switch tabs,  Ctrl+O open timetable
"""

from __future__ import annotations

import sys
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import Optional

from timetable_app.export import export_timetable_csv
from timetable_app.io_json import ConfigError
from timetable_app.substitution.context import PlannerContext
from timetable_app.ui_tk.tabs import (ClassViewTab, DashboardTab, DayViewTab, GridTab,
                                      SubstitutionTab, TeacherViewTab)


class App(tk.Tk):
    def __init__(self, ctx: PlannerContext) -> None:
        super().__init__()
        self.title("Timetable Substitution Planner")
        self.geometry("1100x720")
        self.minsize(820, 560)

        self._timetable_path: Optional[Path] = None
        self._rules_path:     Optional[Path] = None

        self._build_menu()
        self._build_tabs()
        self._build_statusbar()
        # statusbar is packed first so the notebook cannot squeeze it out
        self._nb.pack(fill="both", expand=True, padx=6, pady=6)

        self._ctx = ctx
        self._refresh_all_tabs()
        self._status_var.set("Loaded bundled school timetable.")

    # ---- menu ----------------------------------------------------------------

    def _build_menu(self) -> None:
        menu = tk.Menu(self)
        self.configure(menu=menu)

        file_menu = tk.Menu(menu, tearoff=False)
        menu.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Open timetable...", accelerator="Ctrl+O",
                              command=self.on_open_timetable)
        file_menu.add_command(label="Open rules...", command=self.on_open_rules)
        file_menu.add_command(label="Reload bundled data", command=self.on_reload_bundled)
        file_menu.add_separator()
        file_menu.add_command(label="Export full timetable...", command=self.on_export_timetable)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.quit)

        self.bind_all("<Control-o>", lambda _: self.on_open_timetable())
        for i in range(5):
            self.bind_all(f"<Control-Key-{i + 1}>", lambda _, i=i: self._nb.select(i))

    # ---- tabs ----------------------------------------------------------------

    def _build_tabs(self) -> None:
        self._nb = ttk.Notebook(self)

        self._tab_dashboard = DashboardTab(self._nb)
        self._tab_subs      = SubstitutionTab(self._nb, on_status=self._set_status)

        self._tab_day       = DayViewTab(self._nb)
        self._tab_class     = ClassViewTab(self._nb)
        self._tab_teacher   = TeacherViewTab(self._nb)

        self._nb.add(self._tab_dashboard, text="Dashboard")
        self._nb.add(self._tab_subs,      text="Substitutions")
        self._nb.add(self._tab_day,       text="Day")
        self._nb.add(self._tab_class,     text="Class")
        self._nb.add(self._tab_teacher,   text="Teacher")
        # grids read the plan store, so redraw whichever one is shown
        self._nb.bind("<<NotebookTabChanged>>", self._on_tab_changed)

    def _build_statusbar(self) -> None:
        self._status_var = tk.StringVar(value="Loading timetable...")
        bar = ttk.Label(
            self,
            textvariable=self._status_var,
            relief="sunken",
            anchor="w",
            padding=(6, 2),
        )
        bar.pack(side="bottom", fill="x")

    # ---- file operations -----------------------------------------------------

    def on_open_timetable(self) -> None:
        path = filedialog.askopenfilename(
            title="Open timetable",
            filetypes=[("Text files", "*.txt *.csv"), ("All files", "*.*")],
        )
        if not path:
            return
        self._reload(Path(path), self._rules_path)

    def on_open_rules(self) -> None:
        path = filedialog.askopenfilename(
            title="Open rules",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        self._reload(self._timetable_path, Path(path))

    def on_reload_bundled(self) -> None:
        self._reload(None, None)

    def on_export_timetable(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Export full timetable",
            defaultextension=".csv",
            filetypes=[("CSV", "*.csv"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            export_timetable_csv(self._ctx.timetable, path)
        except OSError as e:
            messagebox.showerror("Export error", str(e))
            return
        self._status_var.set(f"Full timetable written to {path}")

    def _reload(self, timetable_path: Optional[Path], rules_path: Optional[Path]) -> None:
        if not messagebox.askyesno(
            "Discard substitution plans?",
            "Loading new data discards every substitution plan made so far.\nContinue?",
        ):
            return
        try:
            ctx = PlannerContext.load(timetable_path, rules_path)
        except (ConfigError, ValueError, OSError) as e:
            messagebox.showerror("Load error", str(e))
            return
        if not ctx.timetable.days:
            messagebox.showerror("Load error", "No day blocks found in that timetable.")
            return

        self._ctx            = ctx
        self._timetable_path = timetable_path
        self._rules_path     = rules_path
        self._refresh_all_tabs()
        self._status_var.set(f"Loaded: {timetable_path or 'bundled timetable'}")

    # ---- helpers -------------------------------------------------------------

    def _refresh_all_tabs(self) -> None:
        self._tab_dashboard.refresh(self._ctx)
        self._tab_subs.refresh(self._ctx)
        for tab in (self._tab_day, self._tab_class, self._tab_teacher):
            tab.refresh(self._ctx)

    def _on_tab_changed(self, _event) -> None:
        tab = self.nametowidget(self._nb.select())
        if isinstance(tab, GridTab):
            tab.redraw()

    def _set_status(self, text: str) -> None:
        self._status_var.set(text)


def main() -> None:
    try:
        ctx = PlannerContext.load()
    except (ConfigError, ValueError, OSError) as e:
        print(f"[ERROR] Could not load the bundled timetable: {e}", file=sys.stderr)
        sys.exit(1)
    app = App(ctx)
    app.mainloop()


if __name__ == "__main__":
    main()
