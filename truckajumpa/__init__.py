"""
TruckaJumpa Package
===================

Deterministic single-lane truck jump game. A truck parked at the start of
the track must jump obstacles scrolling toward it.

- truck_core: simulation engine, sessions, replay, Gymnasium wrapper
- evaluation: seed-bank harness for scoring agents

Default parameters and presets live in game_config.yaml.
"""
