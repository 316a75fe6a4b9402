from mangum import Mangum


def test_handler_wraps_the_app(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "42:abc")
    monkeypatch.setenv("CHAT_ID", "-100200")
    from files_gateway import lambda_handler

    assert isinstance(lambda_handler.handler, Mangum)
    assert lambda_handler.app.state.settings.is_configured
