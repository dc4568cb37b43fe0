"""
Step-by-step Code Visualizer: Desktop Interface
CustomTkinter + Tkinter hybrid GUI with the dark Catppuccin theme:
code editor with current-line highlight, Step / Run / Pause / Reset
controls, variable table, loop progress, console output, execution
timeline, and a bar-chart player for the sorting traces.
"""
import tkinter as tk
from tkinter import ttk, filedialog
import customtkinter as ctk

from execution_state import ExecutionStatus
from playback import PlaybackController, DEFAULT_INTERVAL_MS
from samples import SAMPLES, DEFAULT_SAMPLE
from sort_trace import SortingEngine, ALGORITHM_INFO, ALGORITHMS, bar_heights
from theme import COLORS, HISTORY_COLORS, STATUS_COLORS, BAR_COLORS
from trace_table import format_value
from values import format_number
from visualizer_engine import VisualizerEngine

# ── CustomTkinter global setup ──
ctk.set_appearance_mode("dark")

CODE_FONT = ("Cascadia Code", 12)
UI_FONT = ("Segoe UI", 10)


class VisualizerApp:
    """Main window: editor on the left, execution panels on the right."""

    def __init__(self):
        self.root = ctk.CTk()
        self.root.title("Code Visualizer")
        self.root.configure(fg_color=COLORS["bg_tertiary"])
        self.root.geometry("1280x800")
        self.root.minsize(960, 600)

        self.engine = VisualizerEngine()
        self.playback = PlaybackController(
            self.engine, self.root.after, self.root.after_cancel,
            interval_ms=DEFAULT_INTERVAL_MS)
        self.playback.subscribe(self._render)
        self._loaded_source = None

        self._build_ui()
        self._load_sample(DEFAULT_SAMPLE)

    # ═══════ UI Construction ═══════

    def _build_ui(self):
        ctk.CTkFrame(self.root, fg_color=COLORS["accent"],
                     corner_radius=0, height=2).pack(fill="x", side="top")
        self._build_toolbar()

        body = tk.PanedWindow(self.root, orient="horizontal",
                              bg=COLORS["surface"], sashwidth=4, sashrelief="flat")
        body.pack(fill="both", expand=True)
        self._build_editor(body)
        self._build_panels(body)
        self._build_statusbar()

    def _button(self, parent, text, command, color=None, width=80):
        button = ctk.CTkButton(
            parent, text=text, command=command,
            fg_color=color or COLORS["button_bg"],
            text_color=COLORS["bg_tertiary"] if color else COLORS["text"],
            hover_color=COLORS["button_hover"], corner_radius=8,
            font=("Segoe UI", 11, "bold"), width=width, height=32,
        )
        button.pack(side="left", padx=4, pady=8)
        return button

    def _build_toolbar(self):
        toolbar = ctk.CTkFrame(self.root, fg_color=COLORS["toolbar_bg"],
                               corner_radius=0, height=48)
        toolbar.pack(fill="x", side="top")
        toolbar.pack_propagate(False)

        self.run_btn = self._button(toolbar, "▶  Run", self.run, COLORS["green"], 90)
        self._button(toolbar, "⏭  Step", self.step)
        self._button(toolbar, "⟲  Reset", self.reset)
        self._button(toolbar, "Open", self.open_file, width=68)

        self.sample_menu = ctk.CTkOptionMenu(
            toolbar, values=list(SAMPLES), command=self._load_sample,
            fg_color=COLORS["button_bg"], button_color=COLORS["overlay"],
            text_color=COLORS["text"], font=UI_FONT, width=160)
        self.sample_menu.pack(side="left", padx=8)

        self._button(toolbar, "Sorting…", self.open_sort_window, width=90)

        ctk.CTkLabel(toolbar, text="Speed", font=UI_FONT,
                     text_color=COLORS["subtext"]).pack(side="left", padx=(16, 4))
        self.speed = ctk.CTkSlider(toolbar, from_=50, to=1500, width=160,
                                   command=self._on_speed)
        self.speed.set(DEFAULT_INTERVAL_MS)
        self.speed.pack(side="left")

        ctk.CTkLabel(toolbar, text="Code Visualizer", font=("Segoe UI", 12, "bold"),
                     text_color=COLORS["accent"]).pack(side="right", padx=16)

    def _build_editor(self, body):
        frame = tk.Frame(body, bg=COLORS["bg"])
        body.add(frame, stretch="always", width=560)
        self.editor = tk.Text(
            frame, font=CODE_FONT, bg=COLORS["bg"], fg=COLORS["text"],
            insertbackground=COLORS["text"], selectbackground=COLORS["selection"],
            relief="flat", bd=0, padx=8, pady=8, wrap="none", undo=True)
        self.editor.pack(fill="both", expand=True)
        self.editor.tag_configure("current_line", background=COLORS["current_line"])
        self.editor.tag_configure("error_line", background="#3d2030")

    def _build_panels(self, body):
        panels = tk.Frame(body, bg=COLORS["bg_secondary"])
        body.add(panels, stretch="always")
        self._configure_treeview_style()

        self.variable_tree = self._tree(panels, "VARIABLES", ("name", "type", "value"), 8)
        self.variable_tree.tag_configure("changed", background=COLORS["changed"])

        self._section_label(panels, "LOOPS")
        self.loop_frame = ctk.CTkFrame(panels, fg_color=COLORS["bg"], corner_radius=0)
        self.loop_frame.pack(fill="x")

        self._section_label(panels, "OUTPUT")
        self.output = tk.Text(panels, height=6, font=("Cascadia Code", 10),
                              bg=COLORS["bg_tertiary"], fg=COLORS["green"],
                              relief="flat", bd=0, padx=8, pady=4, state="disabled")
        self.output.pack(fill="x")

        self.timeline = self._tree(panels, "TIMELINE", ("line", "kind", "description"), 10)
        for kind, color in HISTORY_COLORS.items():
            self.timeline.tag_configure(kind, foreground=color)

    def _section_label(self, parent, text):
        ctk.CTkLabel(parent, text=f"  {text}", font=("Segoe UI", 9, "bold"),
                     text_color=COLORS["subtext"], anchor="w").pack(fill="x", pady=(6, 0))

    def _tree(self, parent, title, columns, height):
        self._section_label(parent, title)
        tree = ttk.Treeview(parent, columns=columns, show="headings",
                            style="Visualizer.Treeview", height=height)
        for column in columns:
            tree.heading(column, text=column.capitalize())
            tree.column(column, width=320 if column in ("value", "description") else 90,
                        anchor="w")
        tree.pack(fill="both", expand=True)
        return tree

    def _configure_treeview_style(self):
        style = ttk.Style(self.root)
        style.theme_use("clam")
        style.configure("Visualizer.Treeview",
                        background=COLORS["bg"], foreground=COLORS["text"],
                        fieldbackground=COLORS["bg"], font=("Cascadia Code", 10),
                        rowheight=24)
        style.configure("Visualizer.Treeview.Heading",
                        background=COLORS["surface"], foreground=COLORS["accent"],
                        font=("Segoe UI", 10, "bold"))
        style.map("Visualizer.Treeview",
                  background=[("selected", COLORS["selection"])])

    def _build_statusbar(self):
        status = ctk.CTkFrame(self.root, fg_color=COLORS["toolbar_bg"],
                              corner_radius=0, height=26)
        status.pack(fill="x", side="bottom")
        status.pack_propagate(False)
        self.status_msg = ctk.CTkLabel(status, text="idle", font=("Segoe UI", 9),
                                       text_color=COLORS["subtext"])
        self.status_msg.pack(side="left", padx=12)
        self.status_line = ctk.CTkLabel(status, text="", font=("Segoe UI", 9),
                                        text_color=COLORS["subtext"])
        self.status_line.pack(side="right", padx=12)

    # ═══════ Commands ═══════

    def _editor_source(self):
        return self.editor.get("1.0", "end-1c")

    def _sync_source(self):
        """Reload the engine when the editor text differs from what it runs."""
        source = self._editor_source()
        if source != self._loaded_source:
            self._loaded_source = source
            self.playback.load(source)

    def run(self):
        if self.playback.is_playing:
            self.playback.pause()
        else:
            self._sync_source()
            self.playback.run()
        self._update_controls()

    def step(self):
        self._sync_source()
        self.playback.step()
        self._update_controls()

    def reset(self):
        self._sync_source()
        self.playback.reset()
        self._update_controls()

    def open_file(self):
        path = filedialog.askopenfilename(
            title="Open Snippet",
            filetypes=[("JavaScript", "*.js"), ("Text", "*.txt"), ("All files", "*.*")])
        if path:
            with open(path, "r", encoding="utf-8") as f:
                self._set_editor_text(f.read())

    def _load_sample(self, name):
        self.sample_menu.set(name)
        self._set_editor_text(SAMPLES[name])

    def _set_editor_text(self, text):
        self.editor.delete("1.0", "end")
        self.editor.insert("1.0", text)
        self._sync_source()
        self._update_controls()

    def _on_speed(self, value):
        self.playback.set_interval(int(value))

    def open_sort_window(self):
        SortTraceWindow(self.root)

    # ═══════ Rendering ═══════

    def _update_controls(self):
        playing = self.playback.is_playing
        self.run_btn.configure(text="⏸  Pause" if playing else "▶  Run",
                               fg_color=COLORS["yellow"] if playing else COLORS["green"])

    def _render(self, snapshot):
        self._render_current_line(snapshot)
        self._render_variables(snapshot)
        self._render_loops(snapshot)
        self._render_output(snapshot)
        self._render_timeline(snapshot)

        status = self.playback.status
        text = status.value
        if snapshot.error:
            text = snapshot.error
        self.status_msg.configure(text=text, text_color=STATUS_COLORS[status.value])
        self.status_line.configure(
            text=f"Line {snapshot.current_line} / {self.engine.get_line_count()}")
        if status in (ExecutionStatus.COMPLETE, ExecutionStatus.ERROR):
            self._update_controls()

    def _render_current_line(self, snapshot):
        self.editor.tag_remove("current_line", "1.0", "end")
        self.editor.tag_remove("error_line", "1.0", "end")
        if snapshot.current_line:
            tag = "error_line" if snapshot.error else "current_line"
            start = f"{snapshot.current_line}.0"
            self.editor.tag_add(tag, start, f"{start} lineend+1c")
            self.editor.see(start)

    def _render_variables(self, snapshot):
        self.variable_tree.delete(*self.variable_tree.get_children())
        for view in snapshot.variables:
            tags = ("changed",) if view.changed else ()
            self.variable_tree.insert("", "end", tags=tags,
                                      values=(view.name, view.type, format_value(view.value)))

    def _render_loops(self, snapshot):
        for child in self.loop_frame.winfo_children():
            child.destroy()
        for loop in snapshot.loops:
            row = ctk.CTkFrame(self.loop_frame, fg_color="transparent")
            row.pack(fill="x", padx=8, pady=2)
            label = (f"{loop.controlling_variable}: {format_number(loop.current_value)}"
                     f" / {format_number(loop.bound_value)}")
            ctk.CTkLabel(row, text=label, font=("Cascadia Code", 10), width=140, anchor="w",
                         text_color=COLORS["mauve"] if loop.is_active else COLORS["subtext"],
                         ).pack(side="left")
            bar = ctk.CTkProgressBar(row, progress_color=COLORS["mauve"])
            bar.set(loop.progress)
            bar.pack(side="left", fill="x", expand=True, padx=8)

    def _render_output(self, snapshot):
        self.output.configure(state="normal")
        self.output.delete("1.0", "end")
        self.output.insert("1.0", "\n".join(snapshot.output))
        self.output.configure(state="disabled")
        self.output.see("end")

    def _render_timeline(self, snapshot):
        self.timeline.delete(*self.timeline.get_children())
        for entry in snapshot.history:
            self.timeline.insert("", "end", tags=(entry.kind.value,),
                                 values=(entry.line, entry.kind.value, entry.description))
        children = self.timeline.get_children()
        if children:
            self.timeline.see(children[-1])

    def start(self):
        self.root.mainloop()


class SortTraceWindow(ctk.CTkToplevel):
    """Plays back a SortingEngine step log as a bar chart."""

    def __init__(self, parent):
        super().__init__(parent)
        self.title("Sorting Algorithms")
        self.configure(fg_color=COLORS["bg_tertiary"])
        self.geometry("900x640")
        self.transient(parent)
        self.sorter = SortingEngine()
        self.sorter.generate_array()
        self.steps = []
        self.index = 0
        self._job = None
        self._build_ui()
        self._prepare(ALGORITHMS[0])

    def _build_ui(self):
        top = ctk.CTkFrame(self, fg_color=COLORS["toolbar_bg"], corner_radius=0, height=44)
        top.pack(fill="x")
        self.algorithm_menu = ctk.CTkOptionMenu(
            top, values=list(ALGORITHMS), command=self._prepare,
            fg_color=COLORS["button_bg"], button_color=COLORS["overlay"], width=120)
        self.algorithm_menu.pack(side="left", padx=8, pady=6)
        for text, command in [("Play", self.play), ("Step", self.advance),
                              ("Random", lambda: self.load_array("random")),
                              ("Sorted", lambda: self.load_array("sorted")),
                              ("Reverse", lambda: self.load_array("reverse"))]:
            ctk.CTkButton(top, text=text, command=command, width=70, height=28,
                          fg_color=COLORS["button_bg"], text_color=COLORS["text"],
                          hover_color=COLORS["button_hover"]).pack(side="left", padx=4)
        self.info = ctk.CTkLabel(top, text="", font=UI_FONT, text_color=COLORS["subtext"])
        self.info.pack(side="right", padx=12)

        self.canvas = tk.Canvas(self, bg=COLORS["bg"], highlightthickness=0)
        self.canvas.pack(fill="both", expand=True, padx=8, pady=8)
        self.caption = ctk.CTkLabel(self, text="", font=UI_FONT, text_color=COLORS["text"])
        self.caption.pack(fill="x", pady=(0, 4))
        self.details = ctk.CTkLabel(self, text="", font=UI_FONT, text_color=COLORS["subtext"],
                                    justify="left", anchor="w", wraplength=860)
        self.details.pack(fill="x", padx=12, pady=(0, 8))

    def _prepare(self, algorithm):
        self._stop()
        self.algorithm_menu.set(algorithm)
        self.steps = self.sorter.get_steps(algorithm)
        self.index = 0
        info = ALGORITHM_INFO[algorithm]
        self.info.configure(
            text=f"{info.name}  │  best {info.best}  │  avg {info.average}  │  worst {info.worst}"
                 f"  │  space {info.space}  │  {'stable' if info.stable else 'not stable'}")
        steps = "\n".join(f"{n}. {line}" for n, line in enumerate(info.how_it_works, start=1))
        self.details.configure(text=f"{info.description}\n\nHow it works:\n{steps}")
        self._draw(self.sorter.original_array, None)

    def load_array(self, order):
        self.sorter.generate(order)
        self._prepare(self.algorithm_menu.get())

    def play(self):
        self._stop()
        self._tick()

    def _tick(self):
        if self.advance():
            self._job = self.after(120, self._tick)

    def _stop(self):
        if self._job is not None:
            self.after_cancel(self._job)
            self._job = None

    def advance(self):
        if self.index >= len(self.steps):
            return False
        step = self.steps[self.index]
        self.index += 1
        self._draw(step.array, step)
        return True

    def _draw(self, array, step):
        self.canvas.delete("all")
        if not array:
            return
        width = self.canvas.winfo_width()
        height = self.canvas.winfo_height()
        if width <= 1 or height <= 1:
            width, height = 880, 420
        bar_w = width / len(array)
        heights = bar_heights(array, height - 20)
        for i, bar_h in enumerate(heights):
            color = BAR_COLORS["default"]
            if step is not None:
                if i in step.sorted:
                    color = BAR_COLORS["sorted"]
                if i in step.comparing:
                    color = BAR_COLORS["comparing"]
                if i in step.swapping:
                    color = BAR_COLORS["swapping"]
            self.canvas.create_rectangle(i * bar_w + 2, height - bar_h,
                                         (i + 1) * bar_w - 2, height, fill=color, width=0)
        if step is not None:
            self.caption.configure(
                text=f"{step.description}   │   comparisons {step.comparisons}"
                     f"   swaps {step.swaps}   │   step {self.index}/{len(self.steps)}")


if __name__ == "__main__":
    VisualizerApp().start()
