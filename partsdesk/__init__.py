"""Parts Desk: parts catalog lookup, order entry, stock audit and reports."""
