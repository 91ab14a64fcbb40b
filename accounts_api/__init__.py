"""Accounts API: read-only views of federated accounts and their resources."""
