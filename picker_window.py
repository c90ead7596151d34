"""Date-range picker window (tkinter)."""

from datetime import date
from tkinter import font as tkfont
import logging
import tkinter as tk

from calendar_logic import date_window
from date_services import CalendarSystem
from formatting import (
    accessibility_date,
    calendar_name,
    day_number,
    locale_name,
    month_title,
    range_length_label,
    selection_label,
    short_month,
    short_weekday,
    weekday_symbols,
    window_label,
)
from picker_model import (
    ChangeCalendar,
    ChangeLocale,
    ClearSelection,
    DayView,
    JumpToToday,
    PickerState,
    ShiftMonth,
    TapDate,
    grid_cells,
    initial_state,
    quick_pick_days,
    reduce,
)
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#E8F1FA"
GRID_BG = "white"
PANEL_BG = "#F3F3F3"
DISABLED_FG = "#AAAAAA"

LOCALE_OPTIONS = (None, "en_US", "fr_FR", "ar_SA")
CALENDAR_OPTIONS = tuple(CalendarSystem)

MAX_WEEKS = 6


class _ToolTip:
    """Lightweight shared tooltip showing the full date of a cell."""

    __slots__ = ("_root", "_tw")

    def __init__(self, root: tk.Tk) -> None:
        self._root = root
        self._tw: tk.Toplevel | None = None

    def show(self, widget: tk.Widget, text: str) -> None:
        self.hide()
        tw = tk.Toplevel(self._root)
        tw.wm_overrideredirect(True)
        tw.wm_attributes("-topmost", True)
        lbl = tk.Label(
            tw, text=text, bg="#FFFFE0", fg="black",
            relief="solid", borderwidth=1, padx=6, pady=3, justify="left",
        )
        lbl.pack()
        x = widget.winfo_rootx() + widget.winfo_width() // 2
        y = widget.winfo_rooty() + widget.winfo_height() + 2
        tw.wm_geometry(f"+{x}+{y}")
        self._tw = tw

    def hide(self) -> None:
        if self._tw:
            self._tw.destroy()
            self._tw = None


class _MonthPanel:
    """Pre-allocated widget pool for the month grid (weekday row + 6 weeks)."""

    __slots__ = ("frame", "day_headers", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict,
                 on_press, on_enter, on_leave) -> None:
        self.frame = tk.Frame(parent, bg=PANEL_BG, padx=6, pady=6)

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(
                self.frame, font=fonts["bold"], bg=PANEL_BG, fg="#666666", width=5,
            )
            lbl.grid(row=0, column=col)
            self.day_headers.append(lbl)

        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(MAX_WEEKS):
            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=fonts["cell_w"], height=fonts["cell_h"],
                    bg=PANEL_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 1, column=c, padx=2, pady=2)
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<Enter>", on_enter)
                cell.bind("<Leave>", on_leave)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class PickerWindow:
    """Single-screen picker: quick-pick strip, month grid and preferences."""

    def __init__(self, today: date | None = None) -> None:
        self.root = tk.Tk()
        self.root.title("Date & Calendar Picker")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        self._settings = load_settings()
        today = today or date.today()
        self._today = today
        self.state: PickerState = initial_state(
            today,
            system=self._settings["calendar"],
            locale_id=self._settings["locale"],
            window=date_window(today, self._settings["min_offset_days"],
                               self._settings["max_offset_days"]),
        )

        # Widget-to-date mapping (filled during _render)
        self._widget_dates: dict[int, DayView] = {}

        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=4)
        _tmp.update_idletasks()
        self._cell_fonts = {
            "bold": self.font_bold,
            "cell_w": _tmp.winfo_reqwidth(),
            "cell_h": _tmp.winfo_reqheight() * 2,
        }
        _tmp.destroy()

        self._build_shell()
        self._tooltip = _ToolTip(self.root)
        self._render()

        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_small = tkfont.Font(family=base, size=7)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=11, weight="bold")
        self.font_section = tkfont.Font(family=base, size=12, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")

    # ------------------------------------------------------------------
    # Build shell (once): header, quick pick, month grid, preferences
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=12, pady=10, fill="both")

        self._build_header()
        self._section("Quick pick")
        self._build_quick_pick()
        self._section("Month calendar")
        self._build_toolbar()
        self._panel = _MonthPanel(
            self._outer, self._cell_fonts,
            self._on_press, self._on_cell_enter, self._on_cell_leave,
        )
        self._panel.frame.pack(fill="x")
        self._section("Preferences")
        self._build_preferences()

    def _section(self, title: str) -> None:
        tk.Label(
            self._outer, text=title, font=self.font_section, bg=GRID_BG, anchor="w",
        ).pack(fill="x", pady=(10, 4))

    def _build_header(self) -> None:
        card = tk.Frame(self._outer, bg=HEADER_BG, padx=12, pady=8)
        card.pack(fill="x")
        tk.Label(
            card, text="Plan with confidence", font=self.font_header, bg=HEADER_BG, anchor="w",
        ).grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 4))

        self._header_values: dict[str, tk.Label] = {}
        for row, title in enumerate(("Selected range", "Length", "Min / Max", "Locale", "Calendar"), 1):
            tk.Label(
                card, text=title, font=self.font_normal, bg=HEADER_BG, fg="#555555",
            ).grid(row=row, column=0, sticky="w")
            value = tk.Label(card, font=self.font_bold, bg=HEADER_BG, anchor="e")
            value.grid(row=row, column=1, sticky="e", padx=(16, 0))
            self._header_values[title] = value
        card.grid_columnconfigure(1, weight=1)

    def _build_quick_pick(self) -> None:
        strip = tk.Frame(self._outer, bg=GRID_BG)
        strip.pack(fill="x")
        count = self._settings["quick_pick_days"]

        self._pill_canvas = tk.Canvas(
            strip, height=self._cell_fonts["cell_h"] + 8, bg=GRID_BG, highlightthickness=0,
        )
        scroll = tk.Scrollbar(strip, orient="horizontal", command=self._pill_canvas.xview)
        self._pill_canvas.configure(xscrollcommand=scroll.set)
        self._pill_canvas.pack(fill="x")
        scroll.pack(fill="x")

        inner = tk.Frame(self._pill_canvas, bg=GRID_BG)
        self._pill_canvas.create_window((0, 0), window=inner, anchor="nw")
        self._pills: list[tk.Canvas] = []
        for i in range(count):
            pill = tk.Canvas(
                inner, width=self._cell_fonts["cell_w"] + 8, height=self._cell_fonts["cell_h"],
                bg=GRID_BG, highlightthickness=1, borderwidth=0,
            )
            pill.grid(row=0, column=i, padx=3, pady=4)
            pill.bind("<ButtonPress-1>", self._on_press)
            pill.bind("<Enter>", self._on_cell_enter)
            pill.bind("<Leave>", self._on_cell_leave)
            self._pills.append(pill)
        inner.update_idletasks()
        self._pill_canvas.configure(scrollregion=self._pill_canvas.bbox("all"))

    def _build_toolbar(self) -> None:
        nav = tk.Frame(self._outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 4))

        self._month_label = tk.Label(nav, font=self.font_header, bg=GRID_BG, anchor="w")
        self._month_label.pack(side="left")

        btn_next = tk.Label(
            nav, text="▶", font=self.font_nav, bg=GRID_BG, cursor="hand2",
        )
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self._dispatch(ShiftMonth(1)))

        btn_today = tk.Label(
            nav, text="●", font=self.font_nav, bg=GRID_BG, fg=ACCENT, cursor="hand2",
        )
        btn_today.pack(side="right", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self._dispatch(JumpToToday(self._today)))

        btn_prev = tk.Label(
            nav, text="◀", font=self.font_nav, bg=GRID_BG, cursor="hand2",
        )
        btn_prev.pack(side="right", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self._dispatch(ShiftMonth(-1)))

    def _build_preferences(self) -> None:
        prefs = tk.Frame(self._outer, bg=PANEL_BG, padx=8, pady=6)
        prefs.pack(fill="x")
        system_locale = self.state.services.system_locale()

        self._locale_var = tk.StringVar(value=self.state.locale_id or "")
        tk.Label(prefs, text="Locale", font=self.font_bold, bg=PANEL_BG).grid(
            row=0, column=0, sticky="w", pady=2,
        )
        for col, locale_id in enumerate(LOCALE_OPTIONS, 1):
            tk.Radiobutton(
                prefs, text=locale_name(locale_id, system_locale), value=locale_id or "",
                variable=self._locale_var, indicatoron=False, font=self.font_normal,
                command=self._on_locale_change, padx=6,
            ).grid(row=0, column=col, sticky="we", padx=1, pady=2)

        self._calendar_var = tk.StringVar(value=self.state.system.value)
        tk.Label(prefs, text="Calendar", font=self.font_bold, bg=PANEL_BG).grid(
            row=1, column=0, sticky="w", pady=2,
        )
        for col, system in enumerate(CALENDAR_OPTIONS, 1):
            tk.Radiobutton(
                prefs, text=calendar_name(system), value=system.value,
                variable=self._calendar_var, indicatoron=False, font=self.font_normal,
                command=self._on_calendar_change, padx=6,
            ).grid(row=1, column=col, sticky="we", padx=1, pady=2)

    # ------------------------------------------------------------------
    # State updates
    # ------------------------------------------------------------------
    def _dispatch(self, event: object) -> None:
        self.state = reduce(self.state, event)
        logger.debug("%r -> selection=%s", event, self.state.selection)
        self._render()

    def _on_locale_change(self) -> None:
        locale_id = self._locale_var.get() or None
        self._dispatch(ChangeLocale(locale_id))
        self._persist_preferences()

    def _on_calendar_change(self) -> None:
        self._dispatch(ChangeCalendar(CalendarSystem(self._calendar_var.get())))
        self._persist_preferences()

    def _persist_preferences(self) -> None:
        settings = load_settings()
        settings["locale"] = self.state.locale_id
        settings["calendar"] = self.state.system.value
        try:
            save_settings(settings)
        except OSError:
            logger.warning("Could not save preferences", exc_info=True)

    # ------------------------------------------------------------------
    # Rendering: reconfigure pooled widgets, no widget creation
    # ------------------------------------------------------------------
    def _render(self) -> None:
        self._widget_dates.clear()
        state = self.state
        config = state.config

        values = self._header_values
        values["Selected range"].configure(text=selection_label(state.selection, config))
        values["Length"].configure(text=range_length_label(state.selection) or "–")
        values["Min / Max"].configure(text=window_label(state.window, config))
        values["Locale"].configure(text=config.locale_id)
        values["Calendar"].configure(text=calendar_name(state.system))

        for pill, view in zip(self._pills, quick_pick_days(state, self._today, len(self._pills))):
            self._draw_day(pill, view, short_weekday(view.value, config),
                           day_number(view.value, config))

        self._month_label.configure(text=month_title(state.display_month, config))
        for lbl, symbol in zip(self._panel.day_headers, weekday_symbols(config)):
            lbl.configure(text=symbol.upper())

        weeks = grid_cells(state, self._today)
        for r in range(MAX_WEEKS):
            row = weeks[r] if r < len(weeks) else []
            for c in range(7):
                cell = self._panel.day_cells[r][c]
                view = row[c] if c < len(row) else None
                if view is None:
                    cell.delete("all")
                    cell.configure(bg=PANEL_BG, cursor="")
                else:
                    self._draw_day(cell, view, day_number(view.value, config),
                                   short_month(view.value, config))

    @staticmethod
    def _day_colors(view: DayView) -> tuple[str, str]:
        if view.in_range:
            return SEL_BG, "black"
        if not view.selectable:
            return GRID_BG, DISABLED_FG
        if view.is_today:
            return GRID_BG, ACCENT
        return GRID_BG, "black"

    def _draw_day(self, cell: tk.Canvas, view: DayView, top: str, bottom: str) -> None:
        cell.delete("all")
        w = int(cell["width"])
        h = int(cell["height"])
        bg, fg = self._day_colors(view)
        cell.configure(
            bg=bg,
            cursor="hand2" if view.selectable else "",
            highlightbackground=ACCENT if view.in_range else "#DDDDDD",
        )
        cell.create_text(w // 2, h // 3, text=top, fill=fg,
                         font=self.font_bold if view.is_today else self.font_normal)
        cell.create_text(w // 2, (2 * h) // 3, text=bottom,
                         fill=fg if view.selectable else DISABLED_FG, font=self.font_small)
        self._widget_dates[id(cell)] = view

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        view = self._widget_dates.get(id(event.widget))
        if view and view.selectable:
            self._dispatch(TapDate(view.value))

    def _on_cell_enter(self, event: tk.Event) -> None:
        view = self._widget_dates.get(id(event.widget))
        if view:
            text = accessibility_date(view.value, self.state.config)
            if not view.selectable:
                text += "\nOutside allowed dates"
            self._tooltip.show(event.widget, text)

    def _on_cell_leave(self, _event: tk.Event) -> None:
        self._tooltip.hide()

    # ESC clears selection first, then hides
    def _on_escape(self, _event: tk.Event) -> None:
        if self.state.selection.start is not None:
            self._dispatch(ClearSelection())
        else:
            self.hide()

    def clear_selection(self) -> None:
        self._dispatch(ClearSelection())

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self._render()
        self.root.deiconify()
        self.root.update_idletasks()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._tooltip.hide()
        self.root.withdraw()

    # Bottom-right corner of the primary screen
    def _position_window(self) -> None:
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = max(0, self.root.winfo_screenwidth() - win_w - 12)
        y = max(0, self.root.winfo_screenheight() - win_h - 60)
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
