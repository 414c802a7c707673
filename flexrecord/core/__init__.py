"""
Record model and contract binding.

Defines the dictionary-backed Record type, the binder that turns abstract
contract classes into concrete record implementations, the bijective type
registry used for in-band type hints, and the push-style record writer.
"""
