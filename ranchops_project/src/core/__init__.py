"""Pure, Qt-free domain logic."""
