"""
Dashboard Tab — who is free right now.

While "Follow clock" is ticked the tab re-reads the wall clock every
Rules.refresh_interval_seconds (Tk after() timer) and shows the teachers
free in the current period. Unticking it lets the user pick any day and
period instead. Either way the list is a fresh query with no absentees and
no plan; the dashboard never writes to the plan store.
Reference: https://tkdocs.com/tutorial/eventloop.html
"""

from __future__ import annotations

import tkinter as tk
from datetime import datetime
from tkinter import ttk
from typing import Optional

from timetable_app.clock import current_day, current_period
from timetable_app.substitution.api import query_free_teachers
from timetable_app.substitution.context import PlannerContext
from timetable_app.substitution.precheck import PlanningError


class DashboardTab(ttk.Frame):
    def __init__(self, parent: tk.Widget) -> None:
        super().__init__(parent)
        self._ctx:   Optional[PlannerContext] = None
        self._timer: Optional[str]            = None
        self._build()

    def _build(self) -> None:
        # ── top: clock + stats ────────────────────────────────────────────────
        top = ttk.Frame(self, padding=8)
        top.pack(fill="x")

        self._clock_var = tk.StringVar(value="")
        ttk.Label(top, textvariable=self._clock_var,
                  font=("TkDefaultFont", 11, "bold")).pack(side="left")

        self._stats_var = tk.StringVar(value="")
        ttk.Label(top, textvariable=self._stats_var, foreground="#555").pack(
            side="left", padx=16
        )

        # ── selectors ─────────────────────────────────────────────────────────
        sel = ttk.Frame(self, padding=(8, 0))
        sel.pack(fill="x")

        self._follow_var = tk.BooleanVar(value=True)
        ttk.Checkbutton(sel, text="Follow clock", variable=self._follow_var,
                        command=self._on_follow_toggle).pack(side="left")

        ttk.Label(sel, text="Day:").pack(side="left", padx=(16, 4))
        self._day_var = tk.StringVar()
        self._day_cb  = ttk.Combobox(sel, textvariable=self._day_var,
                                     state="readonly", width=12)
        self._day_cb.pack(side="left")
        self._day_cb.bind("<<ComboboxSelected>>", lambda _: self._show_selected())

        ttk.Label(sel, text="Period:").pack(side="left", padx=(16, 4))
        self._period_var = tk.StringVar()
        self._period_cb  = ttk.Combobox(sel, textvariable=self._period_var,
                                        state="readonly", width=28)
        self._period_cb.pack(side="left")
        self._period_cb.bind("<<ComboboxSelected>>", lambda _: self._show_selected())

        # ── free teachers list ────────────────────────────────────────────────
        frm = ttk.Frame(self)
        frm.pack(fill="both", expand=True, padx=8, pady=8)

        cols = ("teacher", "workload")
        self.tree = ttk.Treeview(frm, columns=cols, show="headings", height=16)
        self.tree.heading("teacher",  text="Free teacher")
        self.tree.heading("workload", text="Periods today")
        self.tree.column("teacher",  width=220, anchor="w")
        self.tree.column("workload", width=120, anchor="center")

        vsb = ttk.Scrollbar(frm, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        vsb.pack(side="right", fill="y")
        self.tree.pack(side="left", fill="both", expand=True)

        self._empty_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self._empty_var, foreground="#888").pack(
            anchor="w", padx=8, pady=(0, 8)
        )

    # ── public API ─────────────────────────────────────────────────────────────

    def refresh(self, ctx: PlannerContext) -> None:
        self._ctx = ctx
        self._day_cb.configure(values=ctx.timetable.days)
        self._period_cb.configure(values=[
            f"{p.name} ({p.time})" if p.time else p.name for p in ctx.timetable.periods
        ])
        self._tick()

    # ── timer ──────────────────────────────────────────────────────────────────

    def _tick(self) -> None:
        if self._timer is not None:
            self.after_cancel(self._timer)
            self._timer = None
        if self._ctx is None:
            return

        now = datetime.now()
        self._clock_var.set(f"Current time: {now.strftime('%I:%M %p')}")
        if self._follow_var.get():
            self._select_now(now)
        self._show_selected()

        interval_ms = self._ctx.rules.refresh_interval_seconds * 1000
        self._timer = self.after(interval_ms, self._tick)

    def _select_now(self, now: datetime) -> None:
        if self._ctx is None: return
        tt = self._ctx.timetable
        if tt.days:
            day = current_day(tt.days, now)
            self._day_cb.current(tt.days.index(day) if day in tt.days else 0)
        if tt.periods:
            self._period_cb.current(current_period(tt.periods, now))

    def _on_follow_toggle(self) -> None:
        if self._follow_var.get():
            self._tick()

    # ── rendering ──────────────────────────────────────────────────────────────

    def _show_selected(self) -> None:
        if self._ctx is None:
            return
        day    = self._day_var.get()
        period = self._period_cb.current()
        self.tree.delete(*self.tree.get_children())
        if not day or period < 0:
            return

        try:
            free = query_free_teachers(self._ctx, day, period)
        except PlanningError as e:
            self._empty_var.set(str(e))
            return

        for t in free:
            self.tree.insert("", tk.END, values=(t, self._ctx.index.workload_for(t, day)))
        self._empty_var.set("" if free else "No teachers are free for this slot.")
        self._update_stats(day)

    def _update_stats(self, day: str) -> None:
        if self._ctx is None: return
        ctx      = self._ctx
        rows     = ctx.timetable.slots.get(day, {}).values()
        taught   = [s for row in rows for s in row if s.teacher.names]
        active   = {n for s in taught for n in s.teacher.names}
        subs     = ctx.store.get(day).assignment_count()
        self._stats_var.set(
            f"{day}: {len(taught)} taught periods  |  "
            f"{len(active)}/{len(ctx.index.teacher_names)} teachers in today  |  "
            f"{subs} substitution(s) planned"
        )
