"""Notion workspace functions exposed as AI-callable tools."""
