"""Members list frame for Fitness Club Manager.

Provides:
- Table of every member in the roster (search + sort)
- Row colors for active/inactive members
- Export of the visible rows (XLSX through openpyxl, otherwise CSV)
"""

from __future__ import annotations

import csv
import tkinter as tk
from tkinter import filedialog, messagebox
from tkinter import ttk
from typing import Any, Callable

import ttkbootstrap as tb

import config
from members import GymMember, PremiumMember, RegularMember
from roster import Roster
from utils import format_money, log_activity


COLUMNS: dict[str, dict[str, Any]] = {
    "id": {"text": "ID", "width": 70, "anchor": "center"},
    "name": {"text": "Name", "width": 180, "anchor": "w"},
    "type": {"text": "Type", "width": 80, "anchor": "center"},
    "plan": {"text": "Plan / Trainer", "width": 140, "anchor": "w"},
    "phone": {"text": "Phone", "width": 120, "anchor": "center"},
    "email": {"text": "Email", "width": 200, "anchor": "w"},
    "attendance": {"text": "Attendance", "width": 90, "anchor": "center"},
    "loyalty": {"text": "Loyalty", "width": 80, "anchor": "center"},
    "payment": {"text": "Price / Paid", "width": 130, "anchor": "e"},
    "status": {"text": "Status", "width": 80, "anchor": "center"},
}


def member_row(member: GymMember) -> dict[str, Any]:
    """Flatten a member into the values shown by the table."""

    if isinstance(member, RegularMember):
        plan = member.membership_plan
        payment = format_money(member.price)
    elif isinstance(member, PremiumMember):
        plan = member.personal_trainer
        payment = format_money(member.paid_amount)
    else:
        plan = "-"
        payment = "-"

    return {
        "id": member.id,
        "name": member.name,
        "type": member.member_type,
        "plan": plan,
        "phone": member.phone_number,
        "email": member.email,
        "attendance": member.attendance_count,
        "loyalty": member.loyalty_points,
        "payment": payment,
        "status": member.status_text,
    }


class MembersFrame(tb.Frame):
    """Frame that lists the roster and exports it."""

    def __init__(self, parent: ttk.Widget, roster: Roster, on_select: Callable[[str], None] | None = None) -> None:
        super().__init__(parent)
        self.roster = roster
        self.on_select = on_select

        self.search_var = tk.StringVar(master=self, value="")
        self._all_rows: list[dict[str, Any]] = []
        self._rows: list[dict[str, Any]] = []
        self._sort_col: str | None = None
        self._sort_desc: bool = False

        self.configure(padding=10)
        self.create_toolbar()
        self.create_table()
        self.create_status_bar()

        self.refresh_data()

    # ------------------------------
    # UI
    # ------------------------------

    def create_toolbar(self) -> None:
        toolbar = tb.Frame(self)
        toolbar.pack(fill="x", pady=(0, 10))

        tb.Label(toolbar, text="🔍").pack(side="left")
        entry = tb.Entry(toolbar, textvariable=self.search_var, width=40)
        entry.pack(side="left", padx=4)
        self.search_var.trace_add("write", lambda *_: self.apply_filters())

        tb.Button(toolbar, text="📤 Export", bootstyle="secondary", command=self.export_to_excel).pack(side="right", padx=4)
        tb.Button(toolbar, text="🔄 Refresh", bootstyle="secondary", command=self.refresh_data).pack(side="right", padx=4)

    def create_table(self) -> None:
        table_frame = tb.Frame(self)
        table_frame.pack(fill="both", expand=True)

        self.tree = ttk.Treeview(table_frame, columns=tuple(COLUMNS), show="headings", selectmode="browse")
        for col, cfg in COLUMNS.items():
            self.tree.heading(col, text=cfg["text"], command=lambda c=col: self.sort_by_column(c))
            self.tree.column(col, width=cfg["width"], minwidth=cfg["width"], anchor=cfg["anchor"], stretch=False)

        vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.tree.yview)
        hsb = ttk.Scrollbar(table_frame, orient="horizontal", command=self.tree.xview)
        self.tree.configure(yscrollcommand=vsb.set, xscrollcommand=hsb.set)

        vsb.pack(side="right", fill="y")
        hsb.pack(side="bottom", fill="x")
        self.tree.pack(side="left", fill="both", expand=True)

        self.tree.tag_configure("active", background=config.THEME_COLORS["active_row"])
        self.tree.tag_configure("inactive", background=config.THEME_COLORS["inactive_row"])

        self.tree.bind("<<TreeviewSelect>>", lambda _e: self.on_selection_change())

    def create_status_bar(self) -> None:
        status_frame = tb.Frame(self)
        status_frame.pack(fill="x", pady=(8, 0))

        self.stats_label = tb.Label(status_frame, text="Total: 0 │ Active: 0 │ Inactive: 0")
        self.stats_label.pack(side="left")

    # ------------------------------
    # Data
    # ------------------------------

    def refresh_data(self) -> None:
        """Rebuild the table from the roster."""

        self._all_rows = [member_row(m) for m in self.roster]
        self.apply_filters()

    def apply_filters(self) -> None:
        q = self.search_var.get().strip().lower()

        def match(row: dict[str, Any]) -> bool:
            if not q:
                return True
            hay = " ".join(str(row.get(k, "")) for k in ("id", "name", "phone", "email"))
            return q in hay.lower()

        rows = [r for r in self._all_rows if match(r)]
        if self._sort_col:
            rows = sorted(rows, key=lambda r: r[self._sort_col], reverse=self._sort_desc)
        self._rows = rows

        self.tree.delete(*self.tree.get_children())
        for r in rows:
            tag = "active" if r["status"] == "Active" else "inactive"
            self.tree.insert("", "end", values=[r[c] for c in COLUMNS], tags=(tag,))

        stats = self.roster.get_stats()
        self.stats_label.configure(
            text=f"Total: {stats['total']} │ Active: {stats['active']} │ Inactive: {stats['inactive']}"
            f" │ Regular: {stats['regular']} │ Premium: {stats['premium']}"
        )

    def sort_by_column(self, col: str) -> None:
        if self._sort_col == col:
            self._sort_desc = not self._sort_desc
        else:
            self._sort_col = col
            self._sort_desc = False
        self.apply_filters()

    def on_selection_change(self) -> None:
        sel = self.tree.selection()
        if not sel or self.on_select is None:
            return
        values = self.tree.item(sel[0], "values")
        if values:
            self.on_select(str(values[0]))

    # ------------------------------
    # Export
    # ------------------------------

    def export_to_excel(self) -> None:
        """Export the visible rows to Excel (xlsx) or CSV."""

        if not self._rows:
            messagebox.showwarning("Export", "No data to export")
            return

        file_path = filedialog.asksaveasfilename(
            title="Export members",
            defaultextension=".xlsx",
            filetypes=[("Excel", "*.xlsx"), ("CSV", "*.csv")],
        )
        if not file_path:
            return

        try:
            if file_path.lower().endswith(".xlsx"):
                self._export_xlsx(file_path)
            else:
                self._export_csv(file_path)
        except OSError as e:
            messagebox.showerror("Export", f"Export failed: {e}")
            return

        log_activity("export_table", f"{len(self._rows)} rows -> {file_path}")
        messagebox.showinfo("Export", "Export completed successfully")

    def _export_csv(self, file_path: str) -> None:
        with open(file_path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow([cfg["text"] for cfg in COLUMNS.values()])
            for r in self._rows:
                w.writerow([r[c] for c in COLUMNS])

    def _export_xlsx(self, file_path: str) -> None:
        import openpyxl
        from openpyxl.styles import Alignment, Font

        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Members"

        ws.append([cfg["text"] for cfg in COLUMNS.values()])
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center")

        for r in self._rows:
            ws.append([r[c] for c in COLUMNS])

        for col_cells in ws.columns:
            width = max(len(str(c.value or "")) for c in col_cells)
            ws.column_dimensions[col_cells[0].column_letter].width = min(width + 2, 40)

        wb.save(file_path)
