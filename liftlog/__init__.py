"""LiftLog - workout plan lifecycle and session tracking.

Plans are versioned by rollover (archive + clone with a "(#N)" suffix), and each
(plan, week, day) slot holds at most one saved session and one completion mark.
"""

__version__ = "0.3.0"
