"""Main entry point for the terminal drag-and-drop board."""
import logging
import click
from board import BoardState
from cli import CLI

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@click.command()
@click.option('--demo/--empty', default=True, show_default=True,
              help='Start from the three-column demo board or an empty one.')
@click.option('--alt-screen/--no-alt-screen', default=True, envvar='DRAGBOARD_ALT_SCREEN',
              show_default=True, help="Draw in the terminal's alternate screen.")
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='WARNING',
              envvar='DRAGBOARD_LOG_LEVEL', show_default=True, help='Logging level (stderr).')
def main(demo: bool, alt_screen: bool, log_level: str) -> None:
    logging.basicConfig(level=log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    board = BoardState.default() if demo else BoardState()
    CLI(board, alt_screen=alt_screen).run()


if __name__ == "__main__":
    main()
