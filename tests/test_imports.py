def test_top_level_api_imports():
    import dotstair as d

    for name in [
        "AdaptiveSession",
        "StaircaseConfig",
        "ConditionConfig",
        "QuestConfig",
        "Method",
        "ConfigurationError",
        "PsychometricFunction",
        "SimulatedObserver",
        "PosteriorEstimator",
        "suggest",
        "UpDownStaircase",
        "StaircaseProcedure",
        "QuestProcedure",
        "ResponseData",
    ]:
        assert hasattr(d, name)
