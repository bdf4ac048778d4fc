"""
Test suite for graphnorm.

Focus areas:
- Identity preservation (shared values, cycles)
- Fixup ordering
- Converter registry immutability
- Wire form and text codec
"""
