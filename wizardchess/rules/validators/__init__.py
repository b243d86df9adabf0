from wizardchess.rules.validators.turn import GuardDecisionValidator, TurnValidator

__all__ = ["GuardDecisionValidator", "TurnValidator"]
