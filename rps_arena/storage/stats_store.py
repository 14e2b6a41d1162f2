"""
统计数据存储
Statistics Store

将玩家累计统计与上次选择的对手保存到本地YAML文件。
历史手势只在会话内有效，不会写入文件。
"""
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from ..game.game_logic.statistics import GameStatistics
from ..utils.exceptions import StorageException
from ..utils.logger import setup_logger

logger = setup_logger("RPS.StatsStore")


class StatsStore:
    """统计数据存储类"""

    STATS_KEY = 'player_stats'
    OPPONENT_KEY = 'selected_opponent'

    def __init__(self, path: Union[str, Path]):
        """
        初始化存储

        Args:
            path: 数据文件路径
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        """读取整个数据文件，文件不存在返回空字典"""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"统计文件解析失败，将忽略其内容: {e}")
            return {}
        except OSError as e:
            raise StorageException(f"读取统计文件失败: {e}", path=str(self.path)) from e

        if not isinstance(data, dict):
            if data is not None:
                logger.warning(f"统计文件格式无效: {self.path}")
            return {}
        return data

    def _write(self, data: Dict[str, Any]):
        """写入临时文件后替换数据文件，写入中断不会破坏原文件"""
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False,
                               allow_unicode=True, sort_keys=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageException(f"写入统计文件失败: {e}", path=str(self.path)) from e

    def load(self) -> GameStatistics:
        """
        读取统计记录

        Returns:
            GameStatistics: 统计记录；文件不存在或内容无效时返回全零记录
        """
        raw = self._read().get(self.STATS_KEY)
        if raw is None:
            return GameStatistics.zero()

        if not isinstance(raw, dict):
            logger.warning("统计记录格式无效，已使用空记录")
            return GameStatistics.zero()

        stats = GameStatistics.from_dict(raw)
        if not stats.is_consistent():
            logger.warning(f"统计记录不一致，已使用空记录: {raw}")
            return GameStatistics.zero()

        logger.debug(f"已读取统计记录: {stats}")
        return stats

    def save(self, stats: GameStatistics):
        """
        保存统计记录

        Args:
            stats: 统计记录

        Raises:
            StorageException: 写入失败
        """
        data = self._read()
        data[self.STATS_KEY] = stats.to_dict()
        self._write(data)
        logger.debug(f"已保存统计记录: {self.path}")

    def reset(self) -> GameStatistics:
        """
        清零统计记录

        Returns:
            GameStatistics: 全零记录
        """
        stats = GameStatistics.zero()
        self.save(stats)
        logger.info("统计记录已清零")
        return stats

    def load_selected_opponent(self) -> Optional[str]:
        """读取上次选择的对手ID"""
        opponent_id = self._read().get(self.OPPONENT_KEY)
        if opponent_id is not None and not isinstance(opponent_id, str):
            return None
        return opponent_id

    def save_selected_opponent(self, opponent_id: str):
        """保存选择的对手ID"""
        data = self._read()
        data[self.OPPONENT_KEY] = opponent_id
        self._write(data)
