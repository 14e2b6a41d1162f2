"""
配置加载工具模块
Configuration Loader Utility
"""
import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .exceptions import ConfigurationException
from .logger import setup_logger

logger = setup_logger("RPS.ConfigLoader")

# 默认配置
DEFAULT_CONFIG: Dict[str, Any] = {
    'game': {
        'opponent': None,        # None 表示沿用上次选择或默认对手
        'max_rounds': 0,         # 0 表示不限回合
        'thinking_delay': 1.0,
        'reveal_delay': 1.5,
        'seed': None
    },
    'storage': {
        'stats_file': 'data/stats.yaml'
    },
    'logging': {
        'level': 'INFO',
        'file': None
    }
}

# 各配置项的合法类型
_EXPECTED_TYPES = {
    ('game', 'opponent'): (str, type(None)),
    ('game', 'max_rounds'): (int,),
    ('game', 'thinking_delay'): (int, float),
    ('game', 'reveal_delay'): (int, float),
    ('game', 'seed'): (int, str, type(None)),
    ('storage', 'stats_file'): (str,),
    ('logging', 'level'): (str,),
    ('logging', 'file'): (str, type(None)),
}


class ConfigLoader:
    """配置加载器类"""

    @staticmethod
    def load_config(config_path: str) -> Dict[str, Any]:
        """
        从YAML文件加载配置

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 配置字典

        Raises:
            FileNotFoundError: 配置文件不存在
            ConfigurationException: YAML解析错误或格式无效
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f"配置文件不存在: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML解析错误: {e}")
            raise ConfigurationException(f"YAML解析错误: {e}") from e

        if config is None:
            logger.warning(f"配置文件为空: {config_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {config_path}")

        logger.info(f"成功加载配置文件: {config_path}")
        return config

    @staticmethod
    def load_with_defaults(config_path: Optional[str]) -> Dict[str, Any]:
        """
        加载配置并与默认配置合并，文件不存在时使用默认配置

        Args:
            config_path: 配置文件路径（可为None）

        Returns:
            Dict[str, Any]: 合并并校验后的配置字典

        Raises:
            ConfigurationException: 配置项类型错误
        """
        loaded: Dict[str, Any] = {}
        if config_path:
            try:
                loaded = ConfigLoader.load_config(config_path)
            except FileNotFoundError:
                logger.warning(f"配置文件不存在，使用默认配置: {config_path}")

        config = ConfigLoader.merge(DEFAULT_CONFIG, loaded)
        ConfigLoader.validate(config)
        return config

    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        递归合并配置，override 中的值优先

        Args:
            base: 基础配置
            override: 覆盖配置

        Returns:
            Dict[str, Any]: 新的配置字典
        """
        result = copy.deepcopy(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = ConfigLoader.merge(result[key], value)
            else:
                result[key] = value
        return result

    @staticmethod
    def validate(config: Dict[str, Any]):
        """
        校验配置项类型

        Raises:
            ConfigurationException: 配置项类型错误
        """
        for (section, key), types in _EXPECTED_TYPES.items():
            section_config = config.get(section)
            if not isinstance(section_config, dict):
                raise ConfigurationException(f"配置节必须是映射: {section}", config_key=section)

            value = section_config.get(key)
            if isinstance(value, bool) or not isinstance(value, types):
                raise ConfigurationException(
                    f"配置项类型错误: {section}.{key} = {value!r}",
                    config_key=f"{section}.{key}")

        game = config['game']
        if game['max_rounds'] < 0:
            raise ConfigurationException("max_rounds 不能为负", config_key="game.max_rounds")
        for key in ('thinking_delay', 'reveal_delay'):
            if game[key] < 0:
                raise ConfigurationException(f"{key} 不能为负", config_key=f"game.{key}")

    @staticmethod
    def save_config(config: Dict[str, Any], config_path: str) -> bool:
        """
        保存配置到YAML文件

        Args:
            config: 配置字典
            config_path: 配置文件路径

        Returns:
            bool: 保存是否成功
        """
        config_file = Path(config_path)

        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, 'w', encoding='utf-8') as f:
                yaml.dump(config, f, default_flow_style=False,
                          allow_unicode=True, sort_keys=False)

            logger.info(f"成功保存配置文件: {config_path}")
            return True

        except OSError as e:
            logger.error(f"保存配置文件失败: {e}")
            return False

    @staticmethod
    def get_game_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """从配置中获取游戏配置"""
        return config.get('game', {})

    @staticmethod
    def get_storage_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """从配置中获取存储配置"""
        return config.get('storage', {})

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        """从配置中获取日志配置"""
        return config.get('logging', {})
