"""Infrastructure: logging setup for host applications."""
