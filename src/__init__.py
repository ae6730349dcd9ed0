"""Subnet trainer: IP subnetting and number-base practice questions."""
