"""Domain layer for spendtrack.

Services live in their own modules (``spendtrack.domain.category``,
``spendtrack.domain.establishment``, ``spendtrack.domain.expense``) and are
imported from there; this package only groups them.
"""
