"""Adapters — Discord transport and LLM providers."""
