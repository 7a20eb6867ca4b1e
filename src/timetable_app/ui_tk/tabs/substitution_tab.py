"""
Substitutions Tab — mark teachers absent, generate and reset the day's plan.

Unassigned periods show "--" in the Substitute column and are listed in
the warnings box. The table shows the committed plan for the chosen day;
changing the absent-teacher ticks only updates the preview of which
periods need cover until Generate is pressed.

CSV export uses utf-8-sig (BOM) encoding so Excel opens it correctly.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Callable, Dict, List, Optional

from timetable_app.export import export_plan_csv, export_plan_json, plan_rows
from timetable_app.models import UNASSIGNED
from timetable_app.substitution.api import generate, reset
from timetable_app.substitution.context import PlannerContext
from timetable_app.substitution.precheck import PlanningError
from timetable_app.substitution.result import PlanResult, PlanRow
from timetable_app.substitution.vacancies import extract_vacancies

_STATUS_COLOURS = {
    "OK":       "#2e7d32",
    "PARTIAL":  "#e65100",
    "REJECTED": "#c62828",
}


class SubstitutionTab(ttk.Frame):
    def __init__(self, parent: tk.Widget, on_status: Callable[[str], None]) -> None:
        super().__init__(parent)
        self._on_status = on_status
        self._ctx:    Optional[PlannerContext]    = None
        self._result: Optional[PlanResult]        = None
        self._absent: Dict[str, tk.BooleanVar]    = {}
        self._build()

    def _build(self) -> None:
        # ── left: day + absent teachers ───────────────────────────────────────
        left = ttk.Frame(self, padding=8)
        left.pack(side="left", fill="y")

        ttk.Label(left, text="Day:").pack(anchor="w")
        self._day_var = tk.StringVar()
        self._day_cb  = ttk.Combobox(left, textvariable=self._day_var,
                                     state="readonly", width=16)
        self._day_cb.pack(anchor="w", pady=(0, 8))
        self._day_cb.bind("<<ComboboxSelected>>", lambda _: self._on_day_change())

        ttk.Label(left, text="Absent teachers:").pack(anchor="w")
        box = ttk.Frame(left)
        box.pack(fill="y", expand=True)
        self._canvas = tk.Canvas(box, width=180, highlightthickness=0)
        vsb = ttk.Scrollbar(box, orient="vertical", command=self._canvas.yview)
        self._canvas.configure(yscrollcommand=vsb.set)
        vsb.pack(side="right", fill="y")
        self._canvas.pack(side="left", fill="y", expand=True)
        self._checks = ttk.Frame(self._canvas)
        self._canvas.create_window((0, 0), window=self._checks, anchor="nw")
        self._checks.bind(
            "<Configure>",
            lambda _: self._canvas.configure(scrollregion=self._canvas.bbox("all")),
        )

        btn_row = ttk.Frame(left, padding=(0, 8))
        btn_row.pack(anchor="w")
        ttk.Button(btn_row, text="Generate plan", command=self._on_generate).pack(side="left")
        ttk.Button(btn_row, text="Reset", command=self._on_reset).pack(side="left", padx=4)

        # ── right: plan table ─────────────────────────────────────────────────
        right = ttk.Frame(self, padding=8)
        right.pack(side="left", fill="both", expand=True)

        self._status_var = tk.StringVar(value="No plan yet")
        self._status_lbl = ttk.Label(right, textvariable=self._status_var,
                                     font=("TkDefaultFont", 11, "bold"))
        self._status_lbl.pack(anchor="w")

        frm = ttk.Frame(right)
        frm.pack(fill="both", expand=True, pady=4)
        cols    = ("period", "class", "subject", "absent", "substitute")
        widths  = (90, 150, 170, 120, 120)
        headers = ("Period", "Class", "Subject", "Absent teacher", "Substitute")
        self.tree = ttk.Treeview(frm, columns=cols, show="headings", height=16)
        for col, w, h in zip(cols, widths, headers):
            self.tree.heading(col, text=h)
            self.tree.column(col, width=w, anchor="center")
        self.tree.tag_configure("unassigned", foreground="#c62828")
        tree_vsb = ttk.Scrollbar(frm, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=tree_vsb.set)
        tree_vsb.pack(side="right", fill="y")
        self.tree.pack(side="left", fill="both", expand=True)

        ttk.Label(right, text="Warnings:").pack(anchor="w")
        self._warn = tk.Text(right, height=4, state="disabled",
                             foreground="#c62828", font=("TkDefaultFont", 9))
        self._warn.pack(fill="x", pady=4)

        exp = ttk.Frame(right)
        exp.pack(anchor="w")
        ttk.Button(exp, text="Export JSON…", command=self._export_json).pack(side="left", padx=(0, 4))
        ttk.Button(exp, text="Export CSV…",  command=self._export_csv).pack(side="left")

    # ── public API ─────────────────────────────────────────────────────────────

    def refresh(self, ctx: PlannerContext) -> None:
        self._ctx    = ctx
        self._result = None
        self._day_cb.configure(values=ctx.timetable.days)
        if ctx.timetable.days:
            self._day_cb.current(0)

        for child in self._checks.winfo_children():
            child.destroy()
        self._absent = {}
        for name in ctx.index.teacher_names:
            var = tk.BooleanVar(value=False)
            ttk.Checkbutton(self._checks, text=name, variable=var,
                            command=self._show_preview).pack(anchor="w")
            self._absent[name] = var
        self._on_day_change()

    # ── actions ────────────────────────────────────────────────────────────────

    def _selected_absent(self) -> List[str]:
        return [name for name, var in self._absent.items() if var.get()]

    def _on_day_change(self) -> None:
        if self._ctx is None:
            return
        stored = self._ctx.store.get(self._day_var.get())
        for name, var in self._absent.items():
            var.set(name in stored.absent_teachers)
        self._result = None
        self._show_preview()

    def _on_generate(self) -> None:
        if self._ctx is None:
            return
        day    = self._day_var.get()
        result = generate(self._ctx, day, self._selected_absent())
        if not result.ok:
            messagebox.showwarning("Cannot generate plan", "\n".join(result.warnings))
            return
        self._show_result(result)
        self._on_status(f"Substitution plan generated for {day} — {result.status}")

    def _on_reset(self) -> None:
        if self._ctx is None:
            return
        day = self._day_var.get()
        if self._ctx.store.get(day).assignment_count() == 0:
            messagebox.showinfo("Nothing to reset", f"No substitution plan exists for {day}.")
            return
        if not messagebox.askyesno(
            "Reset plan?",
            f"Are you sure you want to reset the substitution plan for {day}?",
        ):
            return
        try:
            reset(self._ctx, day)
        except PlanningError as e:
            messagebox.showerror("Reset failed", str(e))
            return
        self._result = None
        self._show_preview()
        self._on_status(f"Substitution plan reset for {day}")

    # ── rendering ──────────────────────────────────────────────────────────────

    def _show_preview(self) -> None:
        """Periods the ticked teachers leave open, with any stored substitute."""
        if self._ctx is None:
            return
        day    = self._day_var.get()
        stored = self._ctx.store.get(day)
        rows = sorted(
            (PlanRow(v, stored.substitute(v.class_name, v.period_index))
             for v in extract_vacancies(self._ctx.index, day, self._selected_absent())),
            key=lambda r: r.vacancy.period_index,
        )
        self._fill_table(PlanResult(status="PREVIEW", day=day, plan=stored, rows=rows))
        self._status_var.set(f"{day}: {len(rows)} period(s) need cover")
        self._status_lbl.configure(foreground="#555")
        self._set_warnings([])

    def _show_result(self, result: PlanResult) -> None:
        self._result = result
        self._fill_table(result)
        self._status_var.set(
            f"Substitution plan: {result.day}  —  {result.status}  "
            f"({len(result.rows) - len(result.unassigned())}/{len(result.rows)} covered)"
        )
        self._status_lbl.configure(foreground=_STATUS_COLOURS.get(result.status, "#555"))
        self._set_warnings(result.warnings + [
            f"{r.vacancy.class_name} {self._period_name(r.vacancy.period_index)}: "
            f"no free teacher to cover for {r.vacancy.original_teacher}"
            for r in result.unassigned()
        ])

    def _fill_table(self, result: PlanResult) -> None:
        self.tree.delete(*self.tree.get_children())
        if self._ctx is None: return
        for values in plan_rows(result, self._ctx.timetable.periods):
            tags = ("unassigned",) if values[-1] == UNASSIGNED else ()
            self.tree.insert("", tk.END, values=values, tags=tags)

    def _set_warnings(self, lines: List[str]) -> None:
        self._warn.configure(state="normal")
        self._warn.delete("1.0", tk.END)
        if lines:
            self._warn.insert(tk.END, "\n".join(lines))
        self._warn.configure(state="disabled")

    def _period_name(self, index: int) -> str:
        periods = self._ctx.timetable.periods if self._ctx is not None else []
        return periods[index].name if 0 <= index < len(periods) else f"Period {index + 1}"

    # ── export ─────────────────────────────────────────────────────────────────

    def _export_json(self) -> None:
        if not self._result:
            messagebox.showinfo("No plan", "Generate a plan first.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".json",
            filetypes=[("JSON", "*.json"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            export_plan_json(self._result, path)
        except OSError as e:
            messagebox.showerror("Export error", str(e))
            return
        messagebox.showinfo("Exported", f"Saved to {path}")

    def _export_csv(self) -> None:
        if not self._result or self._ctx is None:
            messagebox.showinfo("No plan", "Generate a plan first.")
            return
        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV", "*.csv"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            export_plan_csv(self._result, path, self._ctx.timetable.periods)
        except OSError as e:
            messagebox.showerror("Export error", str(e))
            return
        messagebox.showinfo("Exported", f"Saved to {path}")
