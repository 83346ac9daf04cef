from .numeric import clamp_easiness, round_half_up, round_to_cents

__all__ = ["clamp_easiness", "round_half_up", "round_to_cents"]
