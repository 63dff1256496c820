"""
Core domain models, errors and contracts.

This module contains the foundational building blocks of the cash dispenser
that are independent of the inventory and the withdrawal algorithm.
"""
