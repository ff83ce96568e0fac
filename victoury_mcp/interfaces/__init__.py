"""Transports: stdio, SSE, plain HTTP and the command line."""
