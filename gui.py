"""
GUI for SciCalc Scientific Calculator
Tkinter keypad driving the calculator engine
"""
import tkinter as tk

import config
from calculator import Calculator, Mode

STANDARD_LAYOUT = [
    [("AC", "clear", "mode"), ("⌫", "backspace", "mode"), ("sci", "scientific", "mode"), ("÷", "÷", "operator")],
    [("7", "7", "normal"), ("8", "8", "normal"), ("9", "9", "normal"), ("×", "×", "operator")],
    [("4", "4", "normal"), ("5", "5", "normal"), ("6", "6", "normal"), ("−", "−", "operator")],
    [("1", "1", "normal"), ("2", "2", "normal"), ("3", "3", "normal"), ("+", "+", "operator")],
    [("+/-", "sign", "normal"), ("0", "0", "normal"), (".", "dot", "normal"), ("=", "equals", "equals")],
]

SCIENTIFIC_LAYOUT = [
    [("sin", "fn:sin"), ("cos", "fn:cos"), ("tan", "fn:tan")],
    [("ln", "fn:ln"), ("log", "fn:log"), ("π", "π")],
    [("(", "("), (")", ")"), ("√", "fn:√")],
    [("x²", "square"), ("xʸ", "^"), ("DEG", "angle")],
]


class SciCalcGUI:
    def __init__(self, root):
        self.root = root
        self.root.title(config.APP_NAME)

        settings = config.load_settings()
        self.dark_mode = settings["dark_mode"]
        self.scientific = settings["scientific"]
        self.calculator = Calculator(settings["angle_mode"])
        self.T = config.get_theme(self.dark_mode)
        self.history_panel = None

        self.create_widgets()
        self.root.bind('<Key>', self.on_key_press)

    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a flat styled button."""
        T = self.T
        if kind == "equals":
            bg, fg = T["equals_bg"], T["equals_fg"]
        elif kind == "operator":
            bg, fg = T["btn_bg"], T["operator_fg"]
        elif kind == "mode":
            bg, fg = T["bg_dark"], T["accent"]
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=T["bg_dark"], activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            **kw
        )

    def create_widgets(self):
        """Create main UI components"""
        T = self.T
        width = config.SCIENTIFIC_WINDOW_WIDTH if self.scientific else config.WINDOW_WIDTH
        self.root.geometry(f"{width}x{config.WINDOW_HEIGHT}")
        self.root.configure(bg=T["bg"])

        top_frame = tk.Frame(self.root, bg=T["bg"])
        top_frame.pack(fill=tk.X, padx=6, pady=(6, 0))
        self._neu_btn(top_frame, "History", self.toggle_history, kind="mode",
                      font=config.LABEL_FONT).pack(side=tk.LEFT)
        self._neu_btn(top_frame, "☾" if not self.dark_mode else "☀", self.toggle_dark_mode,
                      kind="mode", font=config.LABEL_FONT).pack(side=tk.RIGHT)

        self.display_frame = tk.Frame(self.root, bg=T["display_bg"], height=120)
        self.display_frame.pack(fill=tk.X, padx=6, pady=6)
        self.display_frame.pack_propagate(False)
        self.display = tk.Label(
            self.display_frame, text="0", font=config.DISPLAY_FONT,
            bg=T["display_bg"], fg=T["display_fg"], anchor=tk.E, padx=12,
        )
        self.display.pack(side=tk.BOTTOM, fill=tk.X)

        self.keypad_frame = tk.Frame(self.root, bg=T["bg"])
        self.keypad_frame.pack(fill=tk.BOTH, expand=True, padx=6, pady=(0, 6))

        if self.scientific:
            sci_frame = tk.Frame(self.keypad_frame, bg=T["bg"])
            sci_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 4))
            for r, row in enumerate(SCIENTIFIC_LAYOUT):
                for c, (label, action) in enumerate(row):
                    if action == "angle":
                        label = self.calculator.angle_mode.value.upper()
                    btn = self._neu_btn(sci_frame, label, lambda a=action: self.on_button(a))
                    btn.grid(row=r, column=c, sticky="nsew", padx=2, pady=2)
                    if action == "angle":
                        self.angle_button = btn
                sci_frame.rowconfigure(r, weight=1)
            for c in range(3):
                sci_frame.columnconfigure(c, weight=1)

        std_frame = tk.Frame(self.keypad_frame, bg=T["bg"])
        std_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        for r, row in enumerate(STANDARD_LAYOUT):
            for c, (label, action, kind) in enumerate(row):
                if action == "scientific":
                    label = "std" if self.scientific else "sci"
                self._neu_btn(std_frame, label, lambda a=action: self.on_button(a), kind=kind).grid(
                    row=r, column=c, sticky="nsew", padx=2, pady=2)
            std_frame.rowconfigure(r, weight=1)
        for c in range(4):
            std_frame.columnconfigure(c, weight=1)

        self.update_display()

    def rebuild(self):
        for w in self.root.winfo_children():
            w.destroy()
        self.history_panel = None
        self.create_widgets()

    def on_button(self, action):
        """Handle calculator button clicks"""
        calc = self.calculator
        if action.startswith("fn:"):
            calc.add_function(action[3:])
        elif action == "clear":
            calc.clear()
        elif action == "backspace":
            calc.backspace()
        elif action == "dot":
            calc.add_decimal_point()
        elif action == "sign":
            calc.toggle_sign()
        elif action == "square":
            calc.square()
        elif action == "equals":
            calc.calculate()
            if self.history_panel is not None:
                self.show_history()
        elif action == "angle":
            mode = calc.toggle_angle_mode()
            config.save_settings({"angle_mode": mode.value})
            self.angle_button.config(text=mode.value.upper())
        elif action == "scientific":
            self.scientific = not self.scientific
            config.save_settings({"scientific": self.scientific})
            self.rebuild()
            return
        else:
            calc.add_token(action)
        self.update_display()

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = event.char if event.char and event.char.isprintable() else event.keysym
        if self.calculator.press_key(key):
            self.update_display()
            return "break"

    def update_display(self):
        """Update the display"""
        T = self.T
        colour = T["danger"] if self.calculator.mode == Mode.ERROR_SHOWN else T["display_fg"]
        self.display.config(text=self.calculator.get_expression(), fg=colour)

    def toggle_dark_mode(self):
        """Persist dark_mode setting and apply theme immediately."""
        self.dark_mode = not self.dark_mode
        config.save_settings({"dark_mode": self.dark_mode})
        self.T = config.get_theme(self.dark_mode)
        self.rebuild()

    def toggle_history(self):
        if self.history_panel is not None:
            self.history_panel.destroy()
            self.history_panel = None
        else:
            self.show_history()

    def show_history(self):
        """Show history over the keypad"""
        T = self.T
        if self.history_panel is not None:
            self.history_panel.destroy()
        panel = tk.Frame(self.root, bg=T["bg_dark"])
        panel.place(in_=self.keypad_frame, relx=0, rely=0, relwidth=1, relheight=1)
        self.history_panel = panel

        header = tk.Frame(panel, bg=T["bg_dark"])
        header.pack(fill=tk.X, padx=6, pady=4)
        tk.Label(header, text="History", font=(config.LABEL_FONT[0], 13, "bold"),
                 bg=T["bg_dark"], fg=T["text"]).pack(side=tk.LEFT)
        clear_btn = self._neu_btn(header, "Clear", self.clear_history, kind="mode", font=config.LABEL_FONT)
        clear_btn.pack(side=tk.RIGHT)

        entries = self.calculator.history.get_calculation_history()
        if not entries:
            clear_btn.config(state=tk.DISABLED)
            tk.Label(panel, text="No calculations yet.", font=config.LABEL_FONT,
                     bg=T["bg_dark"], fg=T["subtext"]).pack(expand=True)
            return

        listbox = tk.Listbox(panel, font=config.LABEL_FONT, bg=T["display_bg"], fg=T["display_fg"],
                             selectbackground=T["accent"], relief=tk.FLAT, bd=0, highlightthickness=0)
        listbox.pack(fill=tk.BOTH, expand=True, padx=6, pady=(0, 6))
        for entry in entries:
            listbox.insert(tk.END, str(entry))

        def _on_select(event):
            selection = listbox.curselection()
            if selection and self.calculator.select_history(selection[0]):
                self.toggle_history()
                self.update_display()

        listbox.bind("<<ListboxSelect>>", _on_select)

    def clear_history(self):
        self.calculator.clear_history()
        self.show_history()
