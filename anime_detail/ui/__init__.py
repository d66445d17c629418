"""Anime detail widget presentation: view state and card markup."""

from .card import CardProps, render_card
from .widget import AnimeWidget, Failed, Idle, Loading, Ready, WidgetState

__all__ = ["AnimeWidget", "CardProps", "Failed", "Idle", "Loading", "Ready", "WidgetState", "render_card"]
