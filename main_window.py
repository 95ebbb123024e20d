"""Main window for Fitness Club Manager.

It provides:
- Header bar with the application name and a File menu
- "Member Management" tab: registration form, member selector, lifecycle actions
- "Members" tab: table of the roster (MembersFrame)
- "Reports" tab: detailed text listing of all members
- Status bar with the last message and quick roster stats

The window owns no member state of its own; everything goes through the Roster
it is given.
"""

from __future__ import annotations

import sys
import traceback
import tkinter as tk
from datetime import date
from tkinter import filedialog, messagebox
from tkinter import ttk

import ttkbootstrap as tb
from ttkbootstrap.scrolled import ScrolledText
from ttkbootstrap.widgets import DateEntry

import config
from members import GymMember, PremiumMember, RegularMember, plan_price
from members_frame import MembersFrame
from roster import Roster
from utils import (
    build_email,
    format_money,
    get_current_datetime,
    log_activity,
    parse_amount,
    to_date,
    validate_member_inputs,
)

FONTS = {
    "title": ("Segoe UI", 18, "bold"),
    "section": ("Segoe UI", 11, "bold"),
    "body": ("Segoe UI", 10),
    "small": ("Segoe UI", 9),
    "mono": ("Consolas", 10),
}

SELECT_PROMPT = "Select a member"


class MainWindow:
    """Main application window."""

    def __init__(self, roster: Roster, master: tk.Tk | None = None) -> None:
        self.roster = roster

        self._is_toplevel = master is not None
        if self._is_toplevel:
            self.root = tb.Toplevel(master)
        else:
            self.root = tb.Window(themename=config.THEME_NAME)

        self._install_bgerror_handler()
        self.root.report_callback_exception = self._report_callback_exception  # type: ignore[assignment]

        self.status_var = tk.StringVar(master=self.root, value="Ready")
        self.quick_stats_var = tk.StringVar(master=self.root, value="")

        # Form variables
        self.vars: dict[str, tk.Variable] = {
            "id": tk.StringVar(master=self.root),
            "name": tk.StringVar(master=self.root),
            "phone": tk.StringVar(master=self.root),
            "email": tk.StringVar(master=self.root),
            "gender": tk.StringVar(master=self.root, value=config.GENDER_OPTIONS[0]),
            "plan": tk.StringVar(master=self.root, value=config.DEFAULT_PLAN),
            "price": tk.StringVar(master=self.root),
            "referral": tk.StringVar(master=self.root),
            "trainer": tk.StringVar(master=self.root),
            "amount": tk.StringVar(master=self.root),
            "removal_reason": tk.StringVar(master=self.root),
            "selected": tk.StringVar(master=self.root, value=SELECT_PROMPT),
        }

        self.setup_window()
        self.create_menu()
        self.create_header()
        self.create_notebook()
        self.create_status_bar()

        self.vars["plan"].trace_add("write", lambda *_: self.update_price_field())
        self.update_price_field()
        self.refresh_views()

    # ------------------------------
    # Window setup
    # ------------------------------

    def setup_window(self) -> None:
        """Configure window properties."""

        self.root.title(f"{config.APP_NAME} v{config.VERSION}")
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")
        self.root.minsize(config.MIN_WINDOW_WIDTH, config.MIN_WINDOW_HEIGHT)
        self.root.protocol("WM_DELETE_WINDOW", self.on_closing)
        self._center_window()

    def _center_window(self) -> None:
        self.root.update_idletasks()
        x = (self.root.winfo_screenwidth() // 2) - (config.WINDOW_WIDTH // 2)
        y = (self.root.winfo_screenheight() // 2) - (config.WINDOW_HEIGHT // 2)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}+{max(x, 0)}+{max(y, 0)}")

    def _install_bgerror_handler(self) -> None:
        """Ignore benign Tk background errors after the app is destroyed."""

        try:
            self.root.tk.eval(
                """
                proc bgerror {msg} {
                    if {[string match {*application has been destroyed*} $msg]} {
                        return
                    }
                    puts stderr $msg
                }
                """
            )
        except tk.TclError:
            pass

    def _report_callback_exception(self, exc, val, tb_) -> None:  # type: ignore[no-untyped-def]
        tb_text = "".join(traceback.format_exception(exc, val, tb_))
        print(tb_text, file=sys.stderr)
        try:
            config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
            with open(config.ERROR_LOG_PATH, "a", encoding="utf-8") as f:
                f.write(f"\n{'=' * 80}\n{get_current_datetime()}\n{tb_text}\n")
        except OSError:
            pass
        self.set_status(f"Unexpected error: {val}")

    # ------------------------------
    # Layout
    # ------------------------------

    def create_menu(self) -> None:
        menubar = tk.Menu(self.root)

        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Export Report...", command=self.export_report)
        file_menu.add_command(label="Save Data File...", command=self.save_data_file)
        file_menu.add_command(label="Load Data File...", command=self.load_data_file)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_closing)
        menubar.add_cascade(label="File", menu=file_menu)

        help_menu = tk.Menu(menubar, tearoff=0)
        help_menu.add_command(label="Help", command=self.show_help)
        menubar.add_cascade(label="Help", menu=help_menu)

        self.root.config(menu=menubar)

    def create_header(self) -> None:
        header = tb.Frame(self.root, bootstyle="primary", padding=(16, 10))
        header.pack(side="top", fill="x")
        tb.Label(header, text=config.APP_NAME, font=FONTS["title"], bootstyle="inverse-primary").pack(side="left")
        tb.Label(header, text=date.today().strftime(config.DATE_FORMAT), bootstyle="inverse-primary").pack(side="right")

    def create_notebook(self) -> None:
        self.notebook = tb.Notebook(self.root, bootstyle="primary")
        self.notebook.pack(fill="both", expand=True, padx=10, pady=10)

        manage_tab = tb.Frame(self.notebook, padding=10)
        self.notebook.add(manage_tab, text="Member Management")
        self.create_member_info_panel(manage_tab)
        self.create_actions_panel(manage_tab)

        self.members_frame = MembersFrame(self.notebook, self.roster, on_select=self.select_member)
        self.notebook.add(self.members_frame, text="Members")

        reports_tab = tb.Frame(self.notebook, padding=10)
        self.notebook.add(reports_tab, text="Reports")
        self.create_reports_panel(reports_tab)

    def _field_row(self, parent: ttk.Widget, label: str, widget: tk.Widget, row: int, col: int = 0) -> None:
        tb.Label(parent, text=label, font=FONTS["body"]).grid(row=row, column=col, sticky="w", padx=6, pady=4)
        widget.grid(row=row, column=col + 1, sticky="ew", padx=6, pady=4)

    def create_member_info_panel(self, parent: ttk.Widget) -> None:
        form = tb.Labelframe(parent, text="Member Information", padding=10)
        form.pack(side="left", fill="both", expand=True)
        form.columnconfigure(1, weight=1)
        form.columnconfigure(3, weight=1)

        self._field_row(form, "Member ID", tb.Entry(form, textvariable=self.vars["id"]), 0)
        self._field_row(form, "Name", tb.Entry(form, textvariable=self.vars["name"]), 1)
        self._field_row(form, "Phone", tb.Entry(form, textvariable=self.vars["phone"]), 2)

        email_row = tb.Frame(form)
        tb.Entry(email_row, textvariable=self.vars["email"]).pack(side="left", fill="x", expand=True)
        tb.Label(email_row, text=config.EMAIL_DOMAIN).pack(side="left", padx=(4, 0))
        self._field_row(form, "Email", email_row, 3)

        gender_row = tb.Frame(form)
        for g in config.GENDER_OPTIONS:
            tb.Radiobutton(gender_row, text=g, variable=self.vars["gender"], value=g).pack(side="left", padx=(0, 10))
        self._field_row(form, "Gender", gender_row, 4)

        self.dob_entry = DateEntry(form, dateformat=config.DATE_FORMAT, bootstyle="secondary")
        self._field_row(form, "Date of Birth", self.dob_entry, 5)
        self.start_entry = DateEntry(form, dateformat=config.DATE_FORMAT, bootstyle="secondary")
        self._field_row(form, "Start Date", self.start_entry, 6)

        # Regular membership
        tb.Label(form, text="Regular Membership", font=FONTS["section"]).grid(row=0, column=2, columnspan=2, sticky="w", padx=6)
        plan_combo = tb.Combobox(form, textvariable=self.vars["plan"], values=list(config.PLAN_PRICES), state="readonly")
        self._field_row(form, "Plan", plan_combo, 1, col=2)
        self._field_row(form, "Price", tb.Entry(form, textvariable=self.vars["price"], state="readonly"), 2, col=2)
        self._field_row(form, "Referral Source", tb.Entry(form, textvariable=self.vars["referral"]), 3, col=2)
        self._field_row(form, "Removal Reason", tb.Entry(form, textvariable=self.vars["removal_reason"]), 4, col=2)

        # Premium membership
        tb.Label(form, text="Premium Membership", font=FONTS["section"]).grid(row=5, column=2, columnspan=2, sticky="w", padx=6)
        self._field_row(form, "Personal Trainer", tb.Entry(form, textvariable=self.vars["trainer"]), 6, col=2)
        self._field_row(form, "Payment Amount", tb.Entry(form, textvariable=self.vars["amount"]), 7, col=2)
        tb.Label(
            form,
            text=f"Premium charge: {format_money(config.PREMIUM_CHARGE)}  "
            f"(discount {int(config.PREMIUM_DISCOUNT_RATE * 100)}% after full payment)",
            font=FONTS["small"],
        ).grid(row=8, column=2, columnspan=2, sticky="w", padx=6)

    def create_actions_panel(self, parent: ttk.Widget) -> None:
        panel = tb.Labelframe(parent, text="Actions", padding=10)
        panel.pack(side="right", fill="y", padx=(10, 0))

        tb.Label(panel, text="Selected member", font=FONTS["section"]).pack(anchor="w")
        self.member_combo = tb.Combobox(panel, textvariable=self.vars["selected"], state="readonly", width=30)
        self.member_combo.pack(fill="x", pady=(2, 10))
        self.member_combo.bind("<<ComboboxSelected>>", lambda _e: self.handle_member_selection())

        buttons = [
            ("➕ Add Regular Member", "success", self.add_regular_member),
            ("➕ Add Premium Member", "success", self.add_premium_member),
            ("✅ Activate Membership", "info", self.activate_membership),
            ("⛔ Deactivate Membership", "warning", self.deactivate_membership),
            ("📅 Mark Attendance", "info", self.mark_attendance),
            ("⬆️ Upgrade Plan", "primary", self.upgrade_plan),
            ("↩️ Revert Regular Member", "danger", self.revert_regular_member),
            ("↩️ Revert Premium Member", "danger", self.revert_premium_member),
            ("💳 Pay Due Amount", "primary", self.pay_due_amount),
            ("🏷️ Calculate Discount", "primary", self.calculate_discount),
            ("🧹 Clear", "secondary", self.clear_fields),
        ]
        for text, style, command in buttons:
            tb.Button(panel, text=text, bootstyle=style, command=command).pack(fill="x", pady=2)

    def create_reports_panel(self, parent: ttk.Widget) -> None:
        toolbar = tb.Frame(parent)
        toolbar.pack(fill="x", pady=(0, 8))
        tb.Button(toolbar, text="📋 Display All Members", bootstyle="info", command=self.display_all_members).pack(side="left")
        tb.Button(toolbar, text="📝 Export Report", bootstyle="secondary", command=self.export_report).pack(side="left", padx=6)

        self.report_text = ScrolledText(parent, autohide=True, font=FONTS["mono"], wrap="none")
        self.report_text.pack(fill="both", expand=True)

    def create_status_bar(self) -> None:
        """Create bottom status bar."""

        self.status_bar = tb.Frame(self.root, padding=(12, 4))
        self.status_bar.pack(side="bottom", fill="x")

        tb.Label(self.status_bar, textvariable=self.status_var, font=FONTS["small"]).pack(side="left")
        tb.Label(self.status_bar, textvariable=self.quick_stats_var, font=FONTS["small"]).pack(side="right")

    # ------------------------------
    # Helpers
    # ------------------------------

    def set_status(self, message: str) -> None:
        self.status_var.set(message)

    def refresh_views(self) -> None:
        """Refresh selector, members table and status bar stats."""

        items = [SELECT_PROMPT] + [f"{m.id} - {m.name}" for m in self.roster]
        self.member_combo.configure(values=items)
        if self.vars["selected"].get() not in items:
            self.vars["selected"].set(SELECT_PROMPT)

        self.members_frame.refresh_data()

        stats = self.roster.get_stats()
        self.quick_stats_var.set(
            f"Members: {stats['total']} │ Active: {stats['active']} │ "
            f"Premium collected: {format_money(stats['premium_collected'])}"
        )

    def update_price_field(self) -> None:
        self.vars["price"].set(format_money(plan_price(self.vars["plan"].get())))

    def _report(self, action: str, ok: bool, message: str) -> None:
        """Surface an operation result: status bar, activity log and a dialog."""

        log_activity(action, message if ok else f"FAILED: {message}")
        self.set_status(message)
        if ok:
            messagebox.showinfo("Success", message, parent=self.root)
        else:
            messagebox.showerror("Error", message, parent=self.root)

    def _selected_member(self) -> GymMember | None:
        selected = self.vars["selected"].get()
        if not selected or selected == SELECT_PROMPT:
            messagebox.showwarning("Select member", "Please select a member first", parent=self.root)
            return None
        member_id = selected.split(" - ")[0]
        member = self.roster.find_by_id(member_id)
        if member is None:
            messagebox.showerror("Error", f"Member not found: {member_id}", parent=self.root)
        return member

    def _selected_of_type(self, kind: type, label: str) -> GymMember | None:
        member = self._selected_member()
        if member is not None and not isinstance(member, kind):
            messagebox.showwarning("Member type", f"Selected member is not a {label} member", parent=self.root)
            return None
        return member

    def _date_value(self, widget: DateEntry) -> str:
        return str(widget.entry.get()).strip()

    def _set_date_value(self, widget: DateEntry, value: date) -> None:
        widget.entry.delete(0, tk.END)
        widget.entry.insert(0, value.strftime(config.DATE_FORMAT))

    def select_member(self, member_id: str) -> None:
        member = self.roster.find_by_id(member_id)
        if member is None:
            return
        self.vars["selected"].set(f"{member.id} - {member.name}")
        self.handle_member_selection()

    def handle_member_selection(self) -> None:
        selected = self.vars["selected"].get()
        if not selected or selected == SELECT_PROMPT:
            return
        member = self.roster.find_by_id(selected.split(" - ")[0])
        if member is not None:
            self.populate_fields_from_member(member)

    def populate_fields_from_member(self, member: GymMember) -> None:
        self.vars["id"].set(member.id)
        self.vars["name"].set(member.name)
        self.vars["phone"].set(member.phone_number)
        self.vars["email"].set(member.email.split("@")[0])
        self.vars["gender"].set(member.gender)
        self._set_date_value(self.dob_entry, member.date_of_birth)
        self._set_date_value(self.start_entry, member.membership_start_date)

        if isinstance(member, RegularMember):
            self.vars["plan"].set(member.membership_plan)
            self.vars["referral"].set(member.referral_source)
            self.vars["removal_reason"].set(member.removal_reason)
            self.vars["trainer"].set("")
        elif isinstance(member, PremiumMember):
            self.vars["trainer"].set(member.personal_trainer)
            self.vars["referral"].set("")
            self.vars["removal_reason"].set("")

        self.set_status(f"Selected {member.member_type.lower()} member: {member.name}")

    def clear_fields(self) -> None:
        for key in ("id", "name", "phone", "email", "referral", "trainer", "amount", "removal_reason"):
            self.vars[key].set("")
        self.vars["gender"].set(config.GENDER_OPTIONS[0])
        self.vars["plan"].set(config.DEFAULT_PLAN)
        self.vars["selected"].set(SELECT_PROMPT)
        self._set_date_value(self.dob_entry, date.today())
        self._set_date_value(self.start_entry, date.today())
        self.set_status("Form cleared")

    # ------------------------------
    # Registration
    # ------------------------------

    def _validated_inputs(self, is_regular: bool) -> dict[str, object] | None:
        errors = validate_member_inputs(
            member_id=self.vars["id"].get(),
            name=self.vars["name"].get(),
            phone=self.vars["phone"].get(),
            email=self.vars["email"].get(),
            is_regular=is_regular,
            referral_source=self.vars["referral"].get(),
            personal_trainer=self.vars["trainer"].get(),
            date_of_birth=self._date_value(self.dob_entry),
            start_date=self._date_value(self.start_entry),
        )
        if errors:
            messagebox.showerror(
                "Validation Error",
                "Please fix the following errors:\n\n" + "\n".join(f"- {e}" for e in errors),
                parent=self.root,
            )
            return None

        return {
            "member_id": self.vars["id"].get().strip(),
            "name": self.vars["name"].get().strip(),
            "phone_number": self.vars["phone"].get().strip(),
            "email": build_email(self.vars["email"].get()),
            "gender": self.vars["gender"].get(),
            "date_of_birth": to_date(self._date_value(self.dob_entry)),
            "membership_start_date": to_date(self._date_value(self.start_entry)),
        }

    def _register(self, member: GymMember) -> None:
        ok, msg = self.roster.add(member)
        self._report("register", ok, msg if not ok else f"{msg}\nEmail: {member.email}")
        if ok:
            self.refresh_views()
            self.clear_fields()

    def add_regular_member(self) -> None:
        data = self._validated_inputs(is_regular=True)
        if data is None:
            return
        member = RegularMember(
            **data,
            membership_plan=self.vars["plan"].get(),
            referral_source=self.vars["referral"].get().strip(),
        )
        self._register(member)

    def add_premium_member(self) -> None:
        data = self._validated_inputs(is_regular=False)
        if data is None:
            return
        member = PremiumMember(**data, personal_trainer=self.vars["trainer"].get().strip())
        self._register(member)

    # ------------------------------
    # Lifecycle actions
    # ------------------------------

    def activate_membership(self) -> None:
        member = self._selected_member()
        if member is None:
            return
        self._report("activate", *member.activate())
        self.refresh_views()

    def deactivate_membership(self) -> None:
        member = self._selected_member()
        if member is None:
            return
        self._report("deactivate", *member.deactivate())
        self.refresh_views()

    def mark_attendance(self) -> None:
        member = self._selected_member()
        if member is None:
            return
        self._report("attendance", *member.mark_attendance())
        self.refresh_views()

    def upgrade_plan(self) -> None:
        member = self._selected_of_type(RegularMember, "regular")
        if member is None:
            return
        self._report("upgrade", *member.upgrade_plan(self.vars["plan"].get()))
        self.refresh_views()

    def revert_regular_member(self) -> None:
        member = self._selected_of_type(RegularMember, "regular")
        if member is None:
            return
        reason = self.vars["removal_reason"].get().strip()
        if not reason:
            messagebox.showwarning("Revert", "Please enter a removal reason", parent=self.root)
            return
        if not messagebox.askyesno("Confirm", f"Revert {member.name}?", parent=self.root):
            return
        self._report("revert", *member.revert(reason))
        self.refresh_views()

    def revert_premium_member(self) -> None:
        member = self._selected_of_type(PremiumMember, "premium")
        if member is None:
            return
        if not messagebox.askyesno("Confirm", f"Revert {member.name}?", parent=self.root):
            return
        self._report("revert", *member.revert())
        self.refresh_views()

    def pay_due_amount(self) -> None:
        member = self._selected_of_type(PremiumMember, "premium")
        if member is None:
            return
        try:
            amount = parse_amount(self.vars["amount"].get())
        except ValueError:
            messagebox.showerror("Payment", "Please enter a valid numeric amount", parent=self.root)
            return
        self._report("payment", *member.pay_due_amount(amount))
        self.vars["amount"].set("")
        self.refresh_views()

    def calculate_discount(self) -> None:
        member = self._selected_of_type(PremiumMember, "premium")
        if member is None:
            return
        ok, msg, amount = member.calculate_discount()
        if ok:
            msg = f"{msg}\nFinal amount: {format_money(member.charge - amount)}"
        self._report("discount", ok, msg)
        self.refresh_views()

    # ------------------------------
    # Reports & files
    # ------------------------------

    def display_all_members(self) -> None:
        self.report_text.delete("1.0", tk.END)
        if not len(self.roster):
            self.report_text.insert(tk.END, "No members registered.\n")
            return

        for m in self.roster:
            width = max(len(label) for label, _ in m.details())
            for label, value in m.details():
                self.report_text.insert(tk.END, f"{label:<{width}} : {value}\n")
            self.report_text.insert(tk.END, "-" * 60 + "\n")
        self.set_status(f"Displaying {len(self.roster)} members")

    def export_report(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Export members report",
            initialdir=str(config.get_report_path().parent),
            initialfile=config.MEMBERS_REPORT_FILE,
            defaultextension=".txt",
            filetypes=[("Text", "*.txt")],
            parent=self.root,
        )
        if not path:
            return
        self._report("export_report", *self.roster.export_to_text(path))

    def save_data_file(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Save members data file",
            initialdir=str(config.get_data_file_path().parent),
            initialfile=config.MEMBERS_DATA_FILE,
            defaultextension=".txt",
            filetypes=[("Text", "*.txt")],
            parent=self.root,
        )
        if not path:
            return
        self._report("save_data", *self.roster.save_to_data_file(path))

    def load_data_file(self) -> None:
        path = filedialog.askopenfilename(
            title="Open members data file",
            initialdir=str(config.DATA_DIR),
            filetypes=[("Text", "*.txt"), ("All files", "*.*")],
            parent=self.root,
        )
        if not path:
            return
        if len(self.roster) and not messagebox.askyesno(
            "Confirm", "Loading replaces all current members. Continue?", parent=self.root
        ):
            return

        ok, msg, _count = self.roster.import_from_text(path)
        self._report("load_data", ok, msg)
        self.refresh_views()

    def show_help(self) -> None:
        messagebox.showinfo(
            "Help",
            "1. Fill the member form and add a regular or premium member.\n"
            "2. Pick a member in the selector (or in the Members tab) to run actions.\n"
            "3. Upgrade uses the plan chosen in the form.\n"
            "4. Payments use the Payment Amount field.\n"
            "5. File > Save Data File writes a file that File > Load Data File can read.\n"
            "   Export Report writes a readable table that cannot be loaded back.",
            parent=self.root,
        )

    # ------------------------------
    # Lifecycle
    # ------------------------------

    def on_closing(self) -> None:
        """Confirm exit and close window."""

        if messagebox.askyesno("Confirm", "Do you want to close the application?", parent=self.root):
            log_activity("exit", f"Closed with {len(self.roster)} members in memory")
            self.root.destroy()

    def run(self) -> None:
        if self._is_toplevel:
            self.root.wait_window()
            return
        try:
            self.root.mainloop()
        except KeyboardInterrupt:
            pass
