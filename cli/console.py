"""Console UI for finyap application."""

import requests

from core.config import LANGUAGE
from core.diff import render_plain
from core.session import ordered_selection
from cli.api_client import FinyapAPIClient

# ANSI styles
RESET = '\033[0m'
GREEN = '\033[1;32m'
RED = '\033[1;31m'
PINK = '\033[35m'
CYAN = '\033[3;36m'
YELLOW = '\033[33m'
HIGHLIGHT = '\033[42;30m'

CANCEL_WORDS = {'exit', 'esc'}


def style(text: str, code: str, color: bool = True) -> str:
    return f'{code}{text}{RESET}' if color else text


def render_word(word: dict, color: bool = True) -> str:
    """Render one word view: clitics in pink, the current word highlighted."""
    parts = []
    for text, kind in word['segments']:
        parts.append(style(text, PINK, color) if kind == 'clitic' else text)
    rendered = ''.join(parts)
    if word['current']:
        return style(rendered, HIGHLIGHT, color)
    if word['revealed']:
        return style(rendered, GREEN, color)
    return rendered


def render_bar(percentage: float, width: int = 20) -> str:
    filled = int(percentage / 100 * width)
    return '#' * filled + '.' * (width - filled)


class ConsoleUI:
    """Console user interface for finyap application."""

    def __init__(self, client: FinyapAPIClient, per_scenario: int, color: bool = True):
        self.client = client
        self.per_scenario = per_scenario
        self.color = color

    def print_scenarios(self, scenarios: list):
        """Print the scenario list with play statistics."""
        if not scenarios:
            print('No scenarios match your filter.')
            return
        width = max(len(s['name']) for s in scenarios)
        for i, s in enumerate(scenarios, start=1):
            print(f"{i:>3}. {s['name']:<{width}} | Plays: {s['total_plays']:<5} | "
                  f"{render_bar(s['accuracy'])} {s['accuracy']:.0f}%")

    def choose_scenarios(self, scenarios: list) -> list[str] | None:
        """Ask which scenarios to play. Returns None to quit."""
        while True:
            answer = input('Scenarios (e.g. 1,3 or "all", "exit" to quit): ').strip().lower()
            if answer in CANCEL_WORDS:
                return None
            if answer == 'all':
                return [s['name'] for s in scenarios]
            try:
                indices = [int(part) for part in answer.split(',') if part.strip()]
            except ValueError:
                print('Please enter numbers separated by commas.')
                continue
            names = [s['name'] for s in scenarios]
            # Played in the order listed, not the order typed
            chosen = ordered_selection(names, {names[i - 1] for i in indices if 1 <= i <= len(names)})
            if chosen:
                return chosen
            print('Select at least one scenario.')

    def print_playing(self, view: dict):
        print()
        if view['recovery']:
            print(style(f"Recovery Round ({view['remaining']} sentences remaining)", CYAN, self.color))
        print(f"Scenario: {style(view['scenario'], YELLOW, self.color)} [{view['position']}/{view['total']}]")
        print(view['english'])
        print()
        print('  ' + ' '.join(render_word(w, self.color) for w in view['words']))
        if view['recovery']:
            print(style('This is a recovery play for practice. It will not be recorded in your history.',
                        CYAN, self.color))

    def print_round_over(self, view: dict):
        print()
        if view['success']:
            print(style('Correct! You completed the sentence.', GREEN, self.color))
        else:
            print(style('Not quite.', RED, self.color))
            diff = view.get('diff')
            if diff:
                typed, typed_marks = render_plain(diff['input'])
                target, target_marks = render_plain(diff['target'])
                print(f'Your input:    {typed}')
                if typed_marks:
                    print(f'               {typed_marks}')
                print(f'Correct word:  {target}')
                if target_marks:
                    print(f'               {target_marks}')
        print('\nFull sentence:')
        print(f"FI: {style(view['finnish'], GREEN, self.color)}")
        print(f"EN: {view['english']}")
        prompts = {
            'next': 'Press Enter to continue to the next sentence...',
            'recovery': 'Press Enter to begin the recovery round...',
            'finish': 'Press Enter to finish session...'
        }
        input(prompts[view['prompt']])

    def play(self, view: dict) -> None:
        """Play one session until it is done or cancelled."""
        session_id = view['session_id']
        while view['state'] not in ('done', 'cancelled'):
            if view['state'] == 'round_over':
                self.print_round_over(view)
                view = self.client.acknowledge(session_id)
                continue

            self.print_playing(view)
            guess = input('==> ').strip()
            if guess.lower() in CANCEL_WORDS:
                self.client.cancel(session_id)
                print('Session cancelled.')
                return
            if guess:
                view = self.client.submit_guess(session_id, guess)

        if view['state'] == 'done':
            print(style('\nAll sentences mastered. Session complete!', GREEN, self.color))

    def run(self):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to finyap server ({health['sentences']} {LANGUAGE} sentences)")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        while True:
            name_filter = input('\nFilter scenarios by name (Enter for all): ').strip()
            try:
                scenarios = self.client.get_scenarios(name_filter)
            except requests.RequestException as e:
                print(f"Error getting scenarios: {e}")
                return
            self.print_scenarios(scenarios)
            if not scenarios:
                continue

            selected = self.choose_scenarios(scenarios)
            if selected is None:
                print('Goodbye!')
                return

            try:
                view = self.client.start_session(selected, self.per_scenario)
            except requests.HTTPError as e:
                print(f"Cannot start session: {e.response.json().get('detail', e)}")
                continue
            self.play(view)
