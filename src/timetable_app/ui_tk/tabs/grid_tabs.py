# grid_tabs.py - read-only timetable grids: by day, by class, by teacher
# each tab has one combobox (which day / class / teacher) and a Treeview
# whose columns are the periods. rows that carry a substitution get a
# highlight tag; the cell text itself says who covers what (see views.py)
#
# the grids read the plan store every time they are drawn, so App calls
# redraw() when one of these tabs is selected

from __future__ import annotations

import tkinter as tk
from datetime import datetime
from tkinter import ttk
from typing import List, Optional

from timetable_app.clock import current_day
from timetable_app.substitution.context import PlannerContext
from timetable_app.views import GridRow, class_week, day_grid, teacher_week


class GridTab(ttk.Frame):
    first_column  = "Class"
    chooser_label = "Day:"

    def __init__(self, parent: tk.Widget) -> None:
        super().__init__(parent)
        self._ctx: Optional[PlannerContext] = None
        self._build()

    def _build(self) -> None:
        top = ttk.Frame(self, padding=8)
        top.pack(fill="x")
        ttk.Label(top, text=self.chooser_label).pack(side="left")
        self._choice_var = tk.StringVar()
        self._choice_cb  = ttk.Combobox(top, textvariable=self._choice_var,
                                        state="readonly", width=24)
        self._choice_cb.pack(side="left", padx=4)
        self._choice_cb.bind("<<ComboboxSelected>>", lambda _: self.redraw())

        self._info_var = tk.StringVar(value="")
        ttk.Label(top, textvariable=self._info_var, foreground="#555").pack(
            side="left", padx=16
        )

        frm = ttk.Frame(self)
        frm.pack(fill="both", expand=True, padx=8, pady=(0, 8))
        self.tree = ttk.Treeview(frm, show="headings", height=18)
        self.tree.tag_configure("substituted", background="#fff3e0")
        vsb = ttk.Scrollbar(frm, orient="vertical",   command=self.tree.yview)
        hsb = ttk.Scrollbar(frm, orient="horizontal", command=self.tree.xview)
        self.tree.configure(yscrollcommand=vsb.set, xscrollcommand=hsb.set)
        hsb.pack(side="bottom", fill="x")
        vsb.pack(side="right",  fill="y")
        self.tree.pack(side="left", fill="both", expand=True)

    # ── public API ─────────────────────────────────────────────────────────────

    def refresh(self, ctx: PlannerContext) -> None:
        self._ctx = ctx
        choices = self._choices(ctx)
        self._choice_cb.configure(values=choices)
        if choices and self._choice_var.get() not in choices:
            self._choice_var.set(self._default_choice(ctx, choices))
        elif not choices:
            self._choice_var.set("")

        cols = ["label"] + [f"p{i}" for i in range(len(ctx.timetable.periods))]
        self.tree.configure(columns=cols)
        self.tree.heading("label", text=self.first_column)
        self.tree.column("label", width=140, anchor="w", stretch=False)
        for i, period in enumerate(ctx.timetable.periods):
            self.tree.heading(f"p{i}", text=period.name)
            self.tree.column(f"p{i}", width=190, anchor="w")
        self.redraw()

    def redraw(self) -> None:
        self.tree.delete(*self.tree.get_children())
        if self._ctx is None: return
        choice = self._choice_var.get()
        if not choice:
            self._info_var.set("")
            return
        rows = self._rows(self._ctx, choice)
        for row in rows:
            tags = ("substituted",) if row.substituted else ()
            self.tree.insert("", tk.END, values=row.values(), tags=tags)
        self._info_var.set(self._info(self._ctx, choice, rows))

    # ── per-view hooks ─────────────────────────────────────────────────────────

    def _choices(self, ctx: PlannerContext) -> List[str]:
        raise NotImplementedError

    def _default_choice(self, ctx: PlannerContext, choices: List[str]) -> str:
        return choices[0]

    def _rows(self, ctx: PlannerContext, choice: str) -> List[GridRow]:
        raise NotImplementedError

    def _info(self, ctx: PlannerContext, choice: str, rows: List[GridRow]) -> str:
        return ""


class DayViewTab(GridTab):
    """Every class on one day, with the day's substitutions overlaid."""
    first_column  = "Class"
    chooser_label = "Day:"

    def _choices(self, ctx: PlannerContext) -> List[str]:
        return list(ctx.timetable.days)

    def _default_choice(self, ctx: PlannerContext, choices: List[str]) -> str:
        today = current_day(choices, datetime.now())
        return today if today in choices else choices[0]

    def _rows(self, ctx: PlannerContext, choice: str) -> List[GridRow]:
        return day_grid(ctx, choice)

    def _info(self, ctx: PlannerContext, choice: str, rows: List[GridRow]) -> str:
        subs = ctx.store.get(choice).assignment_count()
        return f"{len(rows)} classes  |  {subs} substitution(s) planned"


class ClassViewTab(GridTab):
    """One class across the week."""
    first_column  = "Day"
    chooser_label = "Class:"

    def _choices(self, ctx: PlannerContext) -> List[str]:
        return ctx.timetable.class_names

    def _rows(self, ctx: PlannerContext, choice: str) -> List[GridRow]:
        return class_week(ctx, choice)


class TeacherViewTab(GridTab):
    """One teacher's own classes and cover duty across the week."""
    first_column  = "Day"
    chooser_label = "Teacher:"

    def _choices(self, ctx: PlannerContext) -> List[str]:
        return list(ctx.index.teacher_names)

    def _rows(self, ctx: PlannerContext, choice: str) -> List[GridRow]:
        return teacher_week(ctx, choice)

    def _info(self, ctx: PlannerContext, choice: str, rows: List[GridRow]) -> str:
        return f"Total weekly periods: {ctx.index.weekly_periods.get(choice, 0)}"
