"""Console UI for vocanova application."""

import requests

from core.config import (
    COLOR_GREEN_THRESHOLD, COLOR_LIME_THRESHOLD, COLOR_YELLOW_THRESHOLD
)
from cli.api_client import VocanovaAPIClient


def score_label(accuracy: float) -> str:
    """Colour band for a score, as the practice screen shows it."""
    if accuracy >= COLOR_GREEN_THRESHOLD:
        return 'GREEN'
    if accuracy >= COLOR_LIME_THRESHOLD:
        return 'LIME'
    if accuracy >= COLOR_YELLOW_THRESHOLD:
        return 'YELLOW'
    return 'RED'


class ConsoleUI:
    """Console user interface for vocanova application."""

    def __init__(self, client: VocanovaAPIClient):
        self.client = client

    def print_word(self, word: dict):
        """Print the word to practice."""
        print('\n' + '=' * 50)
        print(f"{word['category_name']} ({word['word_index'] + 1}/{word['words_in_category']})"
              f" - {word['difficulty']}")
        print('=' * 50)
        print(f"\n  >>> {word['text']} <<<")
        print(f"  Say it like: {word['phonetic']}  {word['ipa']}\n")

    def print_result(self, result: dict):
        """Print the score of an attempt."""
        print('-' * 40)
        print(f"Heard: {result['recognized_text']}")
        print(f"Accuracy: {result['accuracy']:.0f}% [{score_label(result['accuracy'])}]")
        print(result['feedback'])
        print(f"+{result['points_earned']} points | streak {result['streak']} | "
              f"total {result['total_points']}")
        print('-' * 40)

    def print_stats(self, stats: dict):
        """Print progress stats."""
        print('\n' + '=' * 50)
        print('PROGRESS')
        print('=' * 50)
        print(f"Points: {stats['points']}")
        print(f"Streak: {stats['streak']}")
        print(f"Attempts: {stats['total_attempts']}")
        print(f"Words mastered: {stats['words_completed']}")
        print(f"Points per attempt: {stats['points_per_attempt']:.1f}")
        print('=' * 50 + '\n')

    def print_categories(self, categories: list[dict]):
        print('Categories: ' + ', '.join(
            f"{c['key']} ({c['word_count']})" for c in categories
        ))

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to vocanova server ({health['service']})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        self.print_categories(self.client.get_categories())
        print('Type what you said, or: "next", "stats", "category <name>", "exit"\n')

        word = self.client.get_current_word()
        self.print_word(word)

        while True:
            user_input = input('==> ').strip()

            if user_input.lower() == 'exit':
                print('Goodbye!')
                return

            elif user_input.lower() == 'next':
                word = self.client.next_word()
                self.print_word(word)

            elif user_input.lower() == 'stats':
                self.print_stats(self.client.get_stats())

            elif user_input.lower().startswith('category'):
                name = user_input[len('category'):].strip()
                try:
                    word = self.client.get_current_word(name)
                    self.print_word(word)
                except requests.HTTPError:
                    print(f"Unknown category: {name}")
                    self.print_categories(self.client.get_categories())

            elif user_input == '':
                print('No speech detected. Please say the word!')

            else:
                try:
                    result = self.client.submit_text(user_input)
                    self.print_result(result)
                except requests.HTTPError as e:
                    print(f"Error submitting attempt: {e}")
