"""
Marketplace Kernel

Ledger core for a freelance marketplace:
- Conditional, atomic balance adjustment
- All-or-nothing job payment transfers
- Deposit limits bound to outstanding obligations
"""

__version__ = "0.1.0"
