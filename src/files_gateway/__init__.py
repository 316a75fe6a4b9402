"""HTTP gateway that stores uploads on Telegram and resolves them back to download URLs."""
