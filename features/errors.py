"""
feature 추출 중 발생하는 에러 정의

모든 에러는 (path, stage, reason)을 가지고 있어서
배치 중 어떤 파일의 어떤 단계에서 실패했는지 바로 알 수 있다.
멀티프로세싱 워커에서 부모 프로세스로 pickle 되어 넘어오므로
생성자 인자를 그대로 args에 보관한다.
"""


class FeatureError(Exception):
    """단일 파일 처리 실패 (stage: read / path / compression / features)"""

    stage = "features"

    def __init__(self, path: str, reason: str, stage: str = None):
        if stage is None:
            stage = type(self).stage
        super().__init__(path, reason, stage)
        self.path = path
        self.reason = reason
        self.stage = stage

    def __reduce__(self):
        return (type(self), (self.path, self.reason, self.stage))

    def __str__(self) -> str:
        return f"[{self.stage}] {self.path}: {self.reason}"


class FileReadError(FeatureError):
    """파일 열기/읽기 실패"""

    stage = "read"


class PathEncodingError(FeatureError):
    """경로를 텍스트(UTF-8)로 표현할 수 없음"""

    stage = "path"


class CompressionError(FeatureError):
    """압축 단계 실패"""

    stage = "compression"
