"""
石头剪刀布游戏主程序入口
Rock Paper Scissors Arena Main Entry
"""
import sys
import argparse
from typing import Optional, List
from .app import Application
from .utils.logger import setup_logger
from .utils.error_handler import global_error_handler
from .utils.exceptions import ConfigurationException, GameException, StorageException

logger = setup_logger("RPS.Main")


def build_parser() -> argparse.ArgumentParser:
    """创建命令行解析器"""
    parser = argparse.ArgumentParser(prog='rps-arena', description='Rock Paper Scissors Arena')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )

    subparsers = parser.add_subparsers(dest='command')

    play_parser = subparsers.add_parser('play', help='与电脑对手对战')
    play_parser.add_argument('--opponent', type=str, default=None, help='对手ID（如 ai-3）')
    play_parser.add_argument('--rounds', type=int, default=None, help='最大回合数，0 表示不限')
    play_parser.add_argument('--seed', type=int, default=None, help='随机种子')
    play_parser.add_argument('--no-delay', action='store_true', help='跳过思考与亮招停顿')

    subparsers.add_parser('stats', help='查看累计统计')
    subparsers.add_parser('reset', help='清零累计统计')
    subparsers.add_parser('opponents', help='列出电脑对手')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or 'play'

    try:
        app = Application(config_path=args.config)

        if command == 'play':
            app.play(
                opponent_id=getattr(args, 'opponent', None),
                max_rounds=getattr(args, 'rounds', None),
                seed=getattr(args, 'seed', None),
                delays=not getattr(args, 'no_delay', False)
            )
        elif command == 'stats':
            app.show_statistics()
        elif command == 'reset':
            app.reset_statistics()
        elif command == 'opponents':
            app.list_opponents()
        return 0

    except KeyboardInterrupt:
        logger.info("用户中断程序")
        return 130
    except (ConfigurationException, GameException, StorageException) as e:
        global_error_handler.handle(e, command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
