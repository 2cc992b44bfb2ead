"""scenes — pygame screens pushed onto ``core.app.App``."""
