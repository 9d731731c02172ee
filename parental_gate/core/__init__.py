"""Gate queuing core: models, challenge pool, schedulers and the coordinator."""
