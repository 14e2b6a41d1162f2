"""
自定义异常类
Custom Exception Classes
"""
from typing import Optional


class GameException(Exception):
    """游戏逻辑异常"""
    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message)
        self.game_state = game_state
        self.message = message


class InvalidMoveException(GameException):
    """无效手势异常（外部输入无法解析为合法手势）"""
    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


class ConfigurationException(Exception):
    """配置异常"""
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
        self.message = message


class StorageException(Exception):
    """统计数据存储异常"""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.message = message
