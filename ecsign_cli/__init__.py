"""ecsign command-line interface."""
