from broker.arguments import merge


def test_user_args_precede_defaults() -> None:
    assert merge(["--name=Alice"], ["--name=John"]) == ["--name=Alice", "--name=John"]


def test_no_deduplication() -> None:
    assert merge(["-v", "-v"], ["-v"]) == ["-v", "-v", "-v"]


def test_empty_sides() -> None:
    assert merge([], ["--env=production"]) == ["--env=production"]
    assert merge(["--branch=main"], []) == ["--branch=main"]
    assert merge([], []) == []


def test_last_wins_consumer_honors_default() -> None:
    name = None
    for arg in merge(["--name=Alice"], ["--name=John"]):
        if arg.startswith("--name="):
            name = arg.split("=", 1)[1]
    assert name == "John"
