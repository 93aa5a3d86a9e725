"""Shared names for the websocket protocol and client commands."""
