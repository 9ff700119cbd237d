"""Ticket and history stores."""
