"""
Design (ui.py)
- Purpose: Build and manage the Tkinter UI (entry form, Treeview, dialogs, sorting, logs panel).
- Inputs: Repo (record store).
- Outputs: None (renders UI, writes to Repo).
- Side effects: Creates windows; shows message boxes; may raise desktop notifications.
- Thread-safety: UI code runs on main thread; log lines from other threads go through after().
"""

import logging
import tkinter as tk
from tkinter import messagebox, simpledialog, ttk

from plyer import notification

from .actions import Feedback, add_record, delete_record, edit_record, search_record
from .config import LOG_MAX_LINES, NOTIFY_TIMEOUT_SEC, TABLE_COLUMNS, WINDOW_SIZE, WINDOW_TITLE
from .logs import PanelHandler
from .repository import Repo
from .utils import next_sort_state, sort_students, student_row

log = logging.getLogger(__name__)


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Public attributes:
        enable_notifications (tk.BooleanVar): toggles desktop notifications for save failures
        show_logs (tk.BooleanVar): toggles visibility of the logs panel
    - Public methods:
        refresh_ui(): repaint the table from the repository
        add_student() / edit_student() / delete_student() / search_student(): button actions
    """

    def __init__(self, root: tk.Tk, repo: Repo):
        self.root = root
        self.repo = repo

        # UI state variables
        self.enable_notifications = tk.BooleanVar(value=True)
        self.show_logs = tk.BooleanVar(value=False)
        self.sort_state = {"column": None, "order": None}

        # Window
        self.root.title(WINDOW_TITLE)
        self.root.geometry(WINDOW_SIZE)
        self.root.rowconfigure(0, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg="#1e1e1e")

        # Paned window: top = form + table + buttons, bottom = logs (when shown)
        self.paned = ttk.PanedWindow(self.root, orient=tk.VERTICAL)
        self.paned.grid(row=0, column=0, sticky="nsew")

        content_frame = tk.Frame(self.paned, bg="#1e1e1e")
        content_frame.rowconfigure(1, weight=1)
        content_frame.columnconfigure(0, weight=1)
        self.paned.add(content_frame, weight=1)

        self.bottom_frame = tk.Frame(self.paned, bg="#1e1e1e")
        self.logs_box = tk.Text(self.bottom_frame, height=6, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")
        self.paned.add(self.bottom_frame, weight=0)  # start collapsed; expand when Logs checked

        def _keep_sash_collapsed(_event=None):
            """When Logs is unchecked, keep sash at bottom so window can resize down."""
            if not self.show_logs.get():
                total = self.paned.winfo_height()
                if total > 0:
                    self.paned.sashpos(0, total)

        self.paned.bind("<Configure>", _keep_sash_collapsed)

        # Style
        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background="#2b2b2b",
            foreground="#f0f0f0",
            fieldbackground="#2b2b2b",
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background="#1e1e1e",
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[("selected", "#444")], foreground=[])

        # Entry form
        form = tk.Frame(content_frame, bg="#1e1e1e")
        form.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
        self.entries: dict[str, tk.Entry] = {}
        widths = {"name": 25, "roll_number": 12, "grade": 8, "email": 30}
        for row, (key, heading) in enumerate(TABLE_COLUMNS):
            tk.Label(form, text=f"{heading}:", fg="white", bg="#1e1e1e").grid(row=row, column=0, sticky="e", padx=5, pady=3)
            entry = tk.Entry(form, width=widths[key])
            entry.grid(row=row, column=1, sticky="w", padx=5, pady=3)
            self.entries[key] = entry

        # Treeview
        self.columns = tuple(key for key, _ in TABLE_COLUMNS)
        self.tree = ttk.Treeview(content_frame, columns=self.columns, show="headings", selectmode="browse")
        self.tree.grid(row=1, column=0, sticky="nsew", padx=10, pady=5)
        for key, heading in TABLE_COLUMNS:
            self.tree.heading(key, text=heading, command=lambda c=key: self.sort_by_column(c))

        # Buttons & toggles
        button_frame = tk.Frame(content_frame, bg="#1e1e1e")
        button_frame.grid(row=2, column=0, sticky="ew", padx=10, pady=(0, 10))

        ttk.Button(button_frame, text="Add", command=self.add_student).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="Edit", command=self.edit_student).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="Delete", command=self.delete_student).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="Search", command=self.search_student).pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Enable Notifications",
            variable=self.enable_notifications,
            fg="white",
            bg="#1e1e1e",
            selectcolor="#2b2b2b",
            activebackground="#1e1e1e",
            activeforeground="white",
        ).pack(side=tk.LEFT, padx=5)

        tk.Checkbutton(
            button_frame,
            text="Show Logs",
            variable=self.show_logs,
            fg="white",
            bg="#1e1e1e",
            selectcolor="#2b2b2b",
            command=self.toggle_logs,
        ).pack(side=tk.LEFT, padx=5)

        # Mirror application log records into the Logs panel
        self._log_handler = PanelHandler(lambda line: self.root.after(0, lambda: self._append_log(line)))
        logging.getLogger().addHandler(self._log_handler)
        self.root.bind("<Destroy>", self._on_destroy, add="+")

        # Initial paint
        self.refresh_ui()

    # ---------- UI callbacks & utilities ----------

    def toggle_logs(self) -> None:
        """Show or hide the logs pane."""
        if self.show_logs.get():
            self.paned.pane(self.bottom_frame, weight=1)
            self.logs_box.pack(fill=tk.BOTH, expand=True, padx=10, pady=(0, 6))
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, int(total * 0.7))
        else:
            self.logs_box.pack_forget()
            self.paned.pane(self.bottom_frame, weight=0)
            self.paned.update_idletasks()
            total = self.paned.winfo_height()
            if total > 0:
                self.paned.sashpos(0, total)

    def refresh_ui(self) -> None:
        """
        Purpose: Rebuild the Tree rows from the repository and apply sorting.
        Side effects: Mutates Treeview items (UI only).
        """
        students = sort_students(self.repo.list_all(), self.sort_state["column"], self.sort_state["order"])
        self.tree.delete(*self.tree.get_children())
        for s in students:
            self.tree.insert("", "end", values=student_row(s))

    def sort_by_column(self, col: str) -> None:
        """Toggle header sort order and refresh."""
        col, order = next_sort_state(self.sort_state["column"], self.sort_state["order"], col)
        self.sort_state["column"] = col
        self.sort_state["order"] = order
        self.refresh_ui()

    def clear_fields(self) -> None:
        for entry in self.entries.values():
            entry.delete(0, tk.END)

    def _field(self, key: str) -> str:
        return self.entries[key].get()

    def _selected_values(self) -> tuple | None:
        """Values of the selected row, None when nothing is selected."""
        selected = self.tree.selection()
        if not selected:
            return None
        return tuple(self.tree.item(selected[0])["values"])

    def _notify(self, message: str) -> bool:
        """Desktop notification; False when disabled or no backend is available."""
        if not self.enable_notifications.get():
            return False
        try:
            notification.notify(
                title="Student records not saved",
                message=message,
                timeout=NOTIFY_TIMEOUT_SEC,
            )
        except Exception:
            log.warning("Desktop notification unavailable", exc_info=True)
            return False
        return True

    def _render(self, feedback: Feedback, title: str) -> None:
        """Show what an action returned: message box, save failure, table refresh, form reset."""
        if feedback.message:
            if feedback.is_error:
                messagebox.showerror(title, feedback.message)
            else:
                messagebox.showinfo(title, feedback.message)
        if feedback.save_failed:
            text = f"{title} failed: {feedback.result.error}"
            if not self._notify(text):
                messagebox.showerror(title, text)
        if feedback.result is not None:
            self.refresh_ui()
        if feedback.clear_form:
            self.clear_fields()

    # ---------- internal helper for Logs ----------

    def _append_log(self, text: str) -> None:
        """
        Purpose: Append one line to the Logs panel and trim to LOG_MAX_LINES.
        Thread-safety: Main thread only (called via after()).
        """
        if not self.logs_box.winfo_exists():
            return
        self.logs_box.configure(state="normal")
        self.logs_box.insert("end", text)
        self.logs_box.see("end")
        total_lines = int(self.logs_box.index("end-1c").split(".")[0])
        if total_lines > LOG_MAX_LINES:
            remove = total_lines - LOG_MAX_LINES
            self.logs_box.delete("1.0", f"{remove + 1}.0")
        self.logs_box.configure(state="disabled")

    def _on_destroy(self, event) -> None:
        if event.widget is self.root:
            logging.getLogger().removeHandler(self._log_handler)

    # ---------- CRUD actions ----------

    def add_student(self) -> None:
        """Validate the form and append a new student; the form is cleared only once saved."""
        feedback = add_record(
            self.repo,
            self._field("name"),
            self._field("roll_number"),
            self._field("grade"),
            self._field("email"),
        )
        self._render(feedback, "Add Student")

    def edit_student(self) -> None:
        """
        Purpose: Overwrite the selected student's name/grade/email with whichever boxes are filled.
                 The roll number is locked.
        """
        feedback = edit_record(
            self.repo,
            self._selected_values(),
            name=self._field("name"),
            grade=self._field("grade"),
            email=self._field("email"),
        )
        self._render(feedback, "Edit Student")

    def delete_student(self) -> None:
        """Remove every student sharing the selected row's roll number."""
        self._render(delete_record(self.repo, self._selected_values()), "Delete Student")

    def search_student(self) -> None:
        """Prompt for a roll number and show the matching record."""
        raw = simpledialog.askstring("Search", "Enter roll number to search:", parent=self.root)
        self._render(search_record(self.repo, raw), "Search")
