"""
Factor/Multiple game package.

Components:
- number_theory/move_engine: divisor and multiple sets, legal moves, the computer's greedy move choice
- move_validator/referee: human input parsing, the opening rule, board state and results
- game: single-game orchestration and metrics
- engine_opponent/random_opponent/user_opponent/human_opponent: players (computer, random baseline, console or web human)
"""
# Package exports are intentionally minimal; import modules directly as needed.
