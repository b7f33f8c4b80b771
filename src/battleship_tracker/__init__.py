"""Battleship game-state tracker."""
