import argparse
import asyncio
import json
import logging
import os
import random
import re
import uuid
from enum import Enum
from pathlib import Path
from typing import List, Dict, Optional, Tuple, Any

from litellm import completion, get_supported_openai_params

from wordboard import SessionController, TextUI
from wordboard.config import Settings
from wordboard.dictionary import source_for
from wordboard.render import feedback_of
from wordboard.types import Won

class ReasoningEffort(Enum):
    DISABLE = "disable"
    LOW     = "low"
    MEDIUM  = "medium"
    HIGH    = "high"

def colored(st, color:Optional[str], background=False): return f"\u001b[{10*background+60*(color.upper() == color)+30+['black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white'].index(color.lower())}m{st}\u001b[0m" if color is not None else st

def query(
    model: str,
    reasoning_effort: Optional[ReasoningEffort],
    messages: List[Dict[str, Any]],
) -> Tuple[str, Optional[str], Any]:
    if reasoning_effort is not None:
        response = completion(model=model, messages=messages, reasoning_effort=reasoning_effort.value)
    else:
        response = completion(model=model, messages=messages)
    answer = response.choices[0].message.content
    cot = getattr(response.choices[0].message, "reasoning_content", None)
    token_usage = response.usage
    return answer, cot, token_usage


def parse_guess(answer: Optional[str]) -> Optional[str]:
    """Pulls a [WORD] guess out of a model answer."""
    match = re.search(r'\[([A-Z]{5})\]', (answer or "").upper())
    return match.group(1) if match else None


def build_controller(settings: Settings, seed: Optional[int] = None) -> SessionController:
    """
    Creates the controller, applies the configured dictionary (if any) and
    starts the first game. A failed load only leaves a diagnostic behind.
    """
    seed = seed if seed is not None else settings.SEED
    controller = SessionController(rng=random.Random(seed))
    if settings.DICTIONARY:
        asyncio.run(controller.load_dictionary(source_for(settings.DICTIONARY)))
    controller.start_new_game()
    return controller


def play_human(controller: SessionController):
    """Interactive terminal game, one guess per line."""
    ui = TextUI()
    view = controller.projection()
    ui.print_welcome(view.max_turns, view.word_length)
    print(ui.get_text_observation(view))

    while True:
        if controller.session.is_over:
            ui.print_game_over(controller.projection())
            try:
                again = input("Play again? [y/N] ").strip().lower()
            except (KeyboardInterrupt, EOFError):
                break
            if again != "y":
                break
            controller.dismiss_diagnostic()
            view = controller.start_new_game()
            os.system('cls' if os.name == 'nt' else 'clear')
            ui.print_welcome(view.max_turns, view.word_length)
            print(ui.get_text_observation(view))
            continue

        try:
            action = ui.get_input(controller.projection())
        except (KeyboardInterrupt, EOFError):
            print("\n\nExiting game.")
            break

        if not action: continue

        view = controller.submit_word(action)

        os.system('cls' if os.name == 'nt' else 'clear')
        ui.print_welcome(view.max_turns, view.word_length)
        print(ui.get_text_observation(view))


def play_llm(
    controller: SessionController,
    model: str,
    reasoning_effort: ReasoningEffort,
    log_dir: Optional[Path],
    max_invalid: int = 10,
):
    """
    Plays a game using an LLM agent.

    Args:
        controller (SessionController): a controller with a game already started.
        model (str): The identifier of the model to use.
        reasoning_effort (ReasoningEffort): The reasoning effort setting for the model.
        log_dir (Path): Where to save the game state, or None to disable logging.
        max_invalid (int): Stop after this many rejected guesses in a row.
    """
    ui = TextUI()
    game_id = str(uuid.uuid4())
    target = controller.session.target

    print(colored("=" * 30, "blue"))
    print(colored("Let's Play Wordboard with an LLM!", "cyan"))
    print(f"{colored('Model:', 'magenta')} {colored(model, 'yellow')}")
    print(f"{colored('Target Word:', 'magenta')} {colored(target, 'yellow')}")
    print(f"{colored('Logging:', 'magenta')} {colored('Enabled' if log_dir else 'Disabled', 'yellow')}")
    print(colored("=" * 30, "blue"))

    game_state: Dict[str, Any] = {
        "model": model,
        "game_id": game_id,
        "target_word": target,
        "won": False,
        "num_turns": 0,
        "rollout": {},
    }

    system_prompt = {"role": "system", "content": (
        "You are an expert Wordle player. Your objective is to guess a 5-letter secret word in 6 tries. "
        "I will provide the current game state after each of your guesses. "
        "Your response MUST be a single, valid 5-letter English word enclosed in square brackets, like [WORD]."
    )}
    view = controller.projection()
    observation_text = ui.get_text_observation(view)
    print(observation_text)
    messages: List[Dict[str, Any]] = [
        system_prompt,
        {"role": "user", "content": f"Here is the initial state:\n{observation_text}\n\nWhat is your first guess?"},
    ]

    supported_params = get_supported_openai_params(model=model) or []
    current_reasoning_effort = reasoning_effort if "reasoning_effort" in supported_params else None

    invalid_streak = 0
    while not controller.session.is_over:
        answer, thoughts, _ = query(model, current_reasoning_effort, messages)

        guess = parse_guess(answer)
        if guess is None:
            print(colored(f"LLM returned an invalid response: '{answer}'. Defaulting to 'RAISE'.", "red"))
            guess = "RAISE"

        if thoughts: print(colored("\n[chain-of-thought]", "yellow"), f"\n{thoughts}")

        row = view.active_row
        print(f"\n{colored(f'LLM Guess ({row + 1}/{view.max_turns}):', 'cyan')} {colored(guess, 'yellow')}")
        print(30*"-", "\n")
        messages.append({"role": "assistant", "content": f"[{guess}]"})

        view = controller.submit_word(guess)

        # invalid guesses are logged under the turn they were attempted on
        turn = game_state["rollout"].setdefault(str(row + 1), {"steps": []})
        turn["steps"].append({
            "input": observation_text,
            "guess": guess,
            "feedback": feedback_of(view, row) or view.message,
        })

        observation_text = ui.get_text_observation(view)
        print(observation_text)
        if controller.session.is_over: break

        invalid_streak = invalid_streak + 1 if view.active_row == row else 0
        if invalid_streak >= max_invalid:
            print(colored(f"{max_invalid} invalid guesses in a row, giving up.", "red"))
            break

        messages.append({"role": "user", "content": f"Here is the current state:\n{observation_text}\n\nWhat is your next guess?"})

    game_state["won"] = isinstance(view.outcome, Won)
    game_state["num_turns"] = len(view.locked_rows)

    print(colored("=" * 30, "blue"))
    agent_name = f"{model} with {reasoning_effort.value} reasoning"
    if isinstance(view.outcome, Won):
        print(colored(f"{agent_name} won! Guessed '{target}' in {view.outcome.guess_count} tries.", "green"))
    else:
        print(colored(f"{agent_name} lost. The word was '{target}'.", "red"))

    if log_dir:
        game_log_dir = log_dir / model.replace('/', '_') / game_id
        os.makedirs(game_log_dir, exist_ok=True)
        game_state_filepath = game_log_dir / "game_state.json"
        try:
            with open(game_state_filepath, 'w') as f:
                json.dump(game_state, f, indent=4)
            print(colored(f"Game state log saved to: {game_state_filepath}", "green"))
        except OSError as e:
            print(colored(f"Error saving game state file: {e}", "red"))

        log_filepath = game_log_dir / "conversation.json"
        try:
            with open(log_filepath, 'w') as f:
                json.dump(messages, f, indent=4)
            print(colored(f"Conversation log saved to: {log_filepath}", "green"))
        except OSError as e:
            print(colored(f"Error saving conversation log: {e}", "red"))

    print(colored("=" * 30, "blue"))
    return game_state


def main():
    settings = Settings()
    parser = argparse.ArgumentParser(
        description="Play the word-guessing puzzle in the terminal, or let an LLM play it.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--player', choices=['human', 'llm'], default='human', help="Who plays the game.")
    parser.add_argument('--dictionary', type=str, default=settings.DICTIONARY, help="Path or URL of the word list.")
    parser.add_argument('--seed', type=int, default=settings.SEED, help="Seed for the target word draw.")
    parser.add_argument('--model', type=str, default=settings.MODEL, help="litellm model identifier for --player llm.")
    parser.add_argument('--reasoning-effort', choices=[e.value for e in ReasoningEffort], default=ReasoningEffort.LOW.value)
    parser.add_argument('--no-log', action='store_true', help="Don't save LLM game logs.")
    parser.add_argument('--log-level', type=str, default=settings.LOG_LEVEL)
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings.DICTIONARY = args.dictionary

    controller = build_controller(settings, seed=args.seed)
    if args.player == 'human':
        play_human(controller)
    else:
        play_llm(
            controller,
            model=args.model,
            reasoning_effort=ReasoningEffort(args.reasoning_effort),
            log_dir=None if args.no_log else settings.LOG_DIR,
        )


if __name__ == "__main__":
    main()
