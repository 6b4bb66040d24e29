"""
This is the main file to run the game.
It imports the run function from the blasteroids app and runs it.
"""

from blasteroids.app import run

if __name__ == "__main__":
    run()
