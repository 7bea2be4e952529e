# 스크래핑 요청 단위 예외
# 페이지/블록 단위 실패는 예외로 올리지 않고 로그만 남긴다 (crawler 참고)

class ScrapeError(Exception):
    """요청 전체를 무의미하게 만드는 실패"""

class InvalidSeedUrl(ScrapeError):
    def __init__(self, url: str, reason: str = "Invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}" if url else reason)
