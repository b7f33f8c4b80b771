"""Battleship game engine."""
