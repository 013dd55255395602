"""Test package for the Greek Journey board game.

Core tests drive the generators and the turn state machine directly with a
fake clock. Smoke tests run the pygame loop headlessly using SDL's dummy
video driver. To run these tests, execute ``pytest`` from the project root.
"""
