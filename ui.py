"""
TicTacToe UI
A graphical interface for the TicTacToe game using Tkinter.

Shows:
- The rendered board (click a cell or press 1-9 to play)
- Game status and score
- Mode, difficulty and first player selection (applied at the next game)

Keys: N = new game, R = reset score
"""

import cv2
import tkinter as tk
from tkinter import ttk
from PIL import Image, ImageTk
from typing import Optional

# Logic imports
from logic.config import GameConfig
from logic.difficulty import Difficulty, GameMode
from logic.game_session import GameSession, GameSnapshot, SessionStatus
from logic.scheduler import Scheduler
from logic.score_tracker import ScoreTracker, JsonFileScoreStore

# Render imports
from render.board_renderer import BoardRenderer
from render.config import RenderConfig


class TkScheduler(Scheduler):
    """Runs the session's deferred moves on the Tk event loop."""

    def __init__(self, root: tk.Misc):
        self.root = root

    def call_later(self, delay_ms: int, callback):
        return self.root.after(delay_ms, callback)

    def cancel(self, handle) -> None:
        try:
            self.root.after_cancel(handle)
        except tk.TclError:
            pass  # Already fired


class TicTacToeUI:
    """
    Main UI class for the TicTacToe game.
    """

    def __init__(self, score_file: Optional[str] = None, config=None):
        """Initialize the UI."""
        self.config = config or GameConfig
        self.renderer = BoardRenderer(RenderConfig())

        # Create UI
        self._create_ui()

        # Game logic
        self.session = GameSession(
            scheduler=TkScheduler(self.root),
            score_tracker=ScoreTracker(JsonFileScoreStore(score_file or self.config.SCORE_FILE)),
            config=self.config,
        )
        self.session.add_observer(self._on_snapshot)

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("TicTacToe")
        self.root.configure(bg='#1a1a2e')
        self.root.resizable(False, False)

        # Main container
        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Configure style
        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background='#1a1a2e')
        style.configure('TLabel', background='#1a1a2e', foreground='white', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 16, 'bold'), foreground='#00d4ff')
        style.configure('Status.TLabel', font=('Segoe UI', 12), foreground='#ffd700')
        style.configure('TButton', font=('Segoe UI', 10, 'bold'))

        # Left panel - Board
        left_frame = ttk.Frame(main_frame)
        left_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(0, 10))

        width, height = self.renderer.image_size
        self.board_canvas = tk.Canvas(left_frame, width=width, height=height, bg='#0f0f1a',
                                      highlightthickness=2, highlightbackground='#00d4ff')
        self.board_canvas.pack()
        self.board_canvas.bind("<Button-1>", self._on_click)

        # Right panel
        right_frame = ttk.Frame(main_frame, width=300)
        right_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=(10, 0))
        right_frame.pack_propagate(False)

        # Game status section
        ttk.Label(right_frame, text="📊 Game Status", style='Title.TLabel').pack()

        self.status_label = ttk.Label(right_frame, text="Press N to start", style='Status.TLabel')
        self.status_label.pack(pady=5)

        self.score_label = ttk.Label(right_frame, text="X 0   O 0   Tie 0")
        self.score_label.pack()

        # Settings section
        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=15)
        ttk.Label(right_frame, text="⚙️ Next Game", style='Title.TLabel').pack()

        self.mode_var = tk.StringVar(value=self.config.DEFAULT_MODE)
        self.diff_var = tk.StringVar(value=self.config.DEFAULT_DIFFICULTY)
        self.first_var = tk.StringVar(value=self.config.DEFAULT_FIRST_PLAYER)

        self._add_choice(right_frame, "Mode", self.mode_var, [m.value for m in GameMode])
        self._add_choice(right_frame, "Difficulty", self.diff_var, [d.value for d in Difficulty])
        self._add_choice(right_frame, "First player", self.first_var, ["X", "O"])

        # Control buttons
        ttk.Separator(right_frame, orient='horizontal').pack(fill=tk.X, pady=15)

        control_frame = ttk.Frame(right_frame)
        control_frame.pack(pady=10)

        tk.Button(
            control_frame,
            text="▶ New Game",
            font=('Segoe UI', 11, 'bold'),
            bg='#10b981',
            fg='white',
            width=12,
            command=self._new_game
        ).pack(side=tk.LEFT, padx=5)

        tk.Button(
            control_frame,
            text="🔄 Reset Score",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._reset_scores
        ).pack(side=tk.LEFT, padx=5)

        # Quit button
        tk.Button(
            right_frame,
            text="✕ Quit",
            font=('Segoe UI', 10),
            bg='#ef4444',
            fg='white',
            width=26,
            command=self._quit
        ).pack(pady=10)

        # Keyboard shortcuts
        self.root.bind("<Key>", self._on_key)

        # Bind close event
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _add_choice(self, parent, label: str, variable: tk.StringVar, values):
        """Add a labelled radio button row."""
        frame = ttk.Frame(parent)
        frame.pack(pady=4, fill=tk.X)
        ttk.Label(frame, text=f"{label}:").pack(side=tk.LEFT)
        for value in values:
            tk.Radiobutton(
                frame,
                text=value.upper(),
                value=value,
                variable=variable,
                bg='#1a1a2e',
                fg='white',
                selectcolor='#2d3748',
                activebackground='#1a1a2e'
            ).pack(side=tk.LEFT, padx=3)

    def _new_game(self):
        """Start a game with the selected settings."""
        print(f"New game: mode={self.mode_var.get()}, difficulty={self.diff_var.get()}, "
              f"first={self.first_var.get()}")
        self.session.new_game(
            first_player=self.first_var.get(),
            mode=self.mode_var.get(),
            difficulty=self.diff_var.get(),
        )

    def _reset_scores(self):
        print("Resetting score...")
        self.session.reset_scores()
        self.status_label.configure(text="Score reset")

    def _human_player(self):
        """Who clicks count for: the side to move in PvP, the human in CPU mode."""
        snapshot = self.session.snapshot()
        if snapshot.settings.mode == GameMode.CPU:
            return snapshot.settings.human_player
        return snapshot.current_player

    def _play(self, index: int):
        player = self._human_player()
        if player is None:
            return
        result = self.session.submit_move(index, player)
        if not result.accepted:
            print(f"Move ignored: {result.error_message}")

    def _on_click(self, event):
        index = self.renderer.cell_at(event.x, event.y)
        if index is not None:
            self._play(index)

    def _on_key(self, event):
        key = event.char.lower() if event.char else ""
        if key == "n":
            self._new_game()
        elif key == "r":
            self._reset_scores()
        elif key and key in "123456789":
            self._play(int(key) - 1)

    def _on_snapshot(self, snapshot: GameSnapshot):
        """Redraw everything from a session snapshot."""
        self._update_board_canvas(snapshot)
        self.status_label.configure(text=self._status_text(snapshot))
        scores = snapshot.scores
        self.score_label.configure(text=f"X {scores.x}   O {scores.o}   Tie {scores.tie}")

    def _status_text(self, snapshot: GameSnapshot) -> str:
        if snapshot.status == SessionStatus.FINISHED:
            if snapshot.is_tie:
                return "🤝 It's a TIE!"
            return f"🏆 {snapshot.winner.value} WINS!"
        if snapshot.status == SessionStatus.IN_PROGRESS:
            settings = snapshot.settings
            if settings.mode == GameMode.CPU and snapshot.current_player == settings.computer_player:
                return "Computer is thinking..."
            return f"Turn: {snapshot.current_player.value}"
        return "Press N to start"

    def _update_board_canvas(self, snapshot: GameSnapshot):
        """Update the board canvas with a freshly rendered image."""
        frame = self.renderer.render(snapshot)

        # Convert BGR to RGB
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

        # Convert to PIL Image
        image = Image.fromarray(frame_rgb)
        photo = ImageTk.PhotoImage(image)

        # Update canvas
        self.board_canvas.delete("all")
        self.board_canvas.create_image(0, 0, anchor=tk.NW, image=photo)
        self.board_canvas.image = photo  # Keep reference

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self._update_board_canvas(self.session.snapshot())
        self._new_game()
        self.root.mainloop()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="TicTacToe UI")
    parser.add_argument(
        "--score-file",
        default=None,
        help="Where to keep the score (JSON)"
    )

    args = parser.parse_args()

    print("\n" + "="*60)
    print("   TicTacToe UI")
    print("="*60 + "\n")

    ui = TicTacToeUI(score_file=args.score_file)
    ui.run()


if __name__ == "__main__":
    main()
