"""
错误处理工具模块
Error Handler Utility Module
"""
import traceback
from typing import Optional, Callable, Dict
from .exceptions import (
    GameException, InvalidMoveException, ConfigurationException, StorageException
)
from .logger import setup_logger

logger = setup_logger("RPS.ErrorHandler")


class ErrorHandler:
    """错误处理器类"""

    def __init__(self):
        """初始化错误处理器"""
        self.error_callbacks: Dict[type, Callable] = {}
        self.setup_default_handlers()

    def setup_default_handlers(self):
        """设置默认错误处理函数（子类在前，按注册顺序匹配）"""
        self.error_callbacks[InvalidMoveException] = self._handle_invalid_move
        self.error_callbacks[GameException] = self._handle_game_error
        self.error_callbacks[ConfigurationException] = self._handle_config_error
        self.error_callbacks[StorageException] = self._handle_storage_error

    def register_handler(self, exception_type: type, handler: Callable):
        """
        注册错误处理函数

        Args:
            exception_type: 异常类型
            handler: 处理函数，签名为 handler(exception, context)
        """
        self.error_callbacks[exception_type] = handler
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        处理异常

        Args:
            exception: 异常对象
            context: 上下文信息

        Returns:
            bool: 是否有对应的处理函数并处理成功
        """
        handler = None
        for exc_type, handler_func in self.error_callbacks.items():
            if isinstance(exception, exc_type):
                handler = handler_func
                break

        if handler is None:
            self._handle_generic_error(exception, context)
            return False

        try:
            handler(exception, context)
            return True
        except Exception as e:
            logger.error(f"错误处理函数执行异常: {e}", exc_info=True)
            return False

    @staticmethod
    def _prefix(context: Optional[str]) -> str:
        return f"[{context}] " if context else ""

    def _handle_invalid_move(self, exception: InvalidMoveException, context: Optional[str]):
        """处理无效手势输入"""
        logger.warning(f"{self._prefix(context)}无效手势输入: {exception.value!r}")

    def _handle_game_error(self, exception: GameException, context: Optional[str]):
        """处理游戏逻辑错误"""
        logger.error(f"{self._prefix(context)}游戏逻辑错误 [状态: {exception.game_state}]: {exception.message}")

    def _handle_config_error(self, exception: ConfigurationException, context: Optional[str]):
        """处理配置错误"""
        logger.error(f"{self._prefix(context)}配置错误 [键: {exception.config_key}]: {exception.message}")

    def _handle_storage_error(self, exception: StorageException, context: Optional[str]):
        """处理存储错误"""
        logger.error(f"{self._prefix(context)}存储错误 [文件: {exception.path}]: {exception.message}")

    def _handle_generic_error(self, exception: Exception, context: Optional[str]):
        """处理通用错误"""
        logger.error(f"{self._prefix(context)}未处理的异常: {type(exception).__name__}: {exception}")
        logger.debug(traceback.format_exc())


# 全局错误处理器实例
global_error_handler = ErrorHandler()
