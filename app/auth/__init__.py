"""Credential submission with email-correction recovery."""
