TEST_BOT_TOKEN = "123456:TEST-token"
TEST_CHAT_ID = "-1001234567890"
TEST_API_URL = "https://telegram.test"
TEST_MAX_UPLOAD_SIZE_BYTES = 1024
