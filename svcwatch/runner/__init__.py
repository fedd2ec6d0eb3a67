"""Command execution — quoting, SSH target parsing, bounded subprocess runs."""
