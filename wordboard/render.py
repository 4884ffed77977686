from typing import List, Optional

from .controller import Projection
from .letters import keyboard
from .types import CellStatus, Lost, Playing, Won


# --- Text-based UI Class ---
class TextUI:
    def __init__(self):
        self.feedback_char_map = {
            CellStatus.CORRECT: "G",
            CellStatus.PRESENT: "Y",
            CellStatus.ABSENT: "X",
            CellStatus.EMPTY: " ",
        }

    def print_welcome(self, max_turns: int = 6, word_length: int = 5):
        print("Wordboard!")
        print(f"Guess the {word_length}-letter word in {max_turns} tries.")
        print(f"Feedback: [{self.feedback_char_map[CellStatus.CORRECT]}] Correct, "
              f"[{self.feedback_char_map[CellStatus.PRESENT]}] Present, "
              f"[{self.feedback_char_map[CellStatus.ABSENT]}] Absent.")
        print("-" * 50)

    def get_input(self, view: Projection) -> str:
        # For human players to interact with the game
        attempt_num = view.active_row + 1
        remaining = view.max_turns - view.active_row
        prompt = f"Attempt #{attempt_num} ({remaining} left). Enter your guess: "
        return input(prompt).strip().upper()

    def get_text_observation(self, view: Projection) -> str:
        status_message = ""
        if view.message and view.message.startswith("Invalid"):
            clean_status = view.message.replace("Invalid: ", "")
            status_message = f"Invalid Guess: {clean_status}\n\n"

        diagnostic = f"[!] {view.diagnostic}\n\n" if view.diagnostic else ""
        return f"{diagnostic}{status_message}{self._get_board_string(view)}\n{self._get_letters_string(view)}"

    def print_game_over(self, view: Projection, player_name: str = "You"):
        print("\n" + "=" * 50)
        if isinstance(view.outcome, Won):
            print(f"{player_name} guessed the word in {view.outcome.guess_count} tries!")
        elif isinstance(view.outcome, Lost):
            print(f"Game over! The secret word was: {view.outcome.target}")
        print("=" * 50)

    def _get_board_string(self, view: Projection) -> str:
        width = view.word_length
        lines = ["=" * (width + 2)]
        for i, row in enumerate(view.grid):
            # typed letters show on the active row too, feedback only once locked
            if i in view.locked_rows or (i == view.active_row and isinstance(view.outcome, Playing)):
                word = "".join(cell.letter or " " for cell in row)
                feedback_chars = "".join(self.feedback_char_map[cell.status] for cell in row)
            else:
                word = feedback_chars = " " * width
            lines.append(f"|{word}|")
            lines.append(f"|{feedback_chars}|")

            if i < view.max_turns - 1:
                lines.append("-" * (width + 2))
        lines.append("=" * (width + 2))
        return "\n".join(lines)

    def _get_letters_string(self, view: Projection) -> str:
        states = keyboard(view.letters)

        def letters_with(status: CellStatus) -> List[str]:
            return sorted(k for k, v in states.items() if v is status)

        lines = ["\nLetters:"]
        lines.append(f"  Correct: {' '.join(letters_with(CellStatus.CORRECT))}")
        lines.append(f"  Present: {' '.join(letters_with(CellStatus.PRESENT))}")
        lines.append(f"  Absent:  {' '.join(letters_with(CellStatus.ABSENT))}")
        lines.append(f"  Unused:  {' '.join(letters_with(CellStatus.EMPTY))}")
        return "\n".join(lines)


def feedback_of(view: Projection, row: int) -> Optional[List[str]]:
    if row not in view.locked_rows:
        return None
    return [cell.status.value for cell in view.grid[row]]
