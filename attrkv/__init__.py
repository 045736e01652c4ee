"""
attrkv: In-Memory Attribute-Typed Key-Value Store

Each key maps to a set of named attributes whose values are typed as
string, number or boolean. An attribute name's type is locked store-wide
the first time it is seen.
"""

__version__ = "1.0.0"
