"""Tests for the card service."""
