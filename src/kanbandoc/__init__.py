"""Kanban board document model and mutation engine."""
