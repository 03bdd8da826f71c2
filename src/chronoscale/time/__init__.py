"""Contains the exact duration type, the leap second table, and conversions between time scales.

Every instant is kept as an exact TAI :class:`.Duration` since J1900 inside an :class:`.Epoch`.
Floating point values only appear when a caller asks for one, so repeated conversions never
accumulate rounding error.
"""
