"""Advisory services: the contract, its implementations and the session boundary."""
