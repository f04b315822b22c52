import sys

from sudoku_puzzle.cli import main

sys.exit(main())
