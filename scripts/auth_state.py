"""登录态缓存维护命令：检查、清理、重新生成。"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ewallet_e2e import config  # noqa: E402
from ewallet_e2e.services.session_cache import SessionCache  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """解析命令参数。"""

    parser = argparse.ArgumentParser(description="管理 Playwright 登录态缓存")
    parser.add_argument("--file", default=str(config.AUTH_STATE_FILE), help="登录态文件路径")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("check", help="检查登录态是否存在且未超过 24 小时")
    subparsers.add_parser("cleanup", help="删除登录态，目录为空时一并删除")
    setup_parser = subparsers.add_parser("setup", help="完整登录并保存登录态")
    setup_parser.add_argument("--force", action="store_true", help="忽略已有缓存，强制重新登录")
    setup_parser.add_argument("--headed", action="store_true", help="显示浏览器窗口")
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
    return args


def check(cache: SessionCache) -> int:
    """打印缓存新鲜度；过期只提示，不影响退出码。"""

    freshness = cache.check_freshness()
    if not freshness.exists:
        print(f"[missing] 未找到登录态：{cache.path}")
    elif freshness.is_stale:
        print(
            f"[stale] 登录态已超过 {freshness.stale_after_hours} 小时"
            f"（{freshness.age_hours:.1f}h），建议执行 setup --force 刷新"
        )
    else:
        print(f"[ok] 登录态存在且较新（{freshness.age_hours:.1f}h）：{cache.path}")
    return 0


def cleanup(cache: SessionCache) -> int:
    """删除缓存的登录态。"""

    directory_existed = cache.path.parent.exists()
    if cache.invalidate():
        print(f"[ok] 已删除登录态：{cache.path}")
    else:
        print(f"[skip] 登录态不存在：{cache.path}")
    if directory_existed and not cache.path.parent.exists():
        print(f"[ok] 已删除空目录：{cache.path.parent}")
    return 0


def setup(cache: SessionCache, *, force: bool, headless: bool) -> int:
    """启动浏览器执行完整登录并写入缓存。"""

    from playwright.sync_api import sync_playwright

    from ewallet_e2e.services.auth_flow import Credentials, bootstrap_session

    credentials = Credentials.from_config()
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        try:
            path = bootstrap_session(browser, cache, credentials, force=force)
        finally:
            browser.close()
    print(f"[ok] 登录态已就绪：{path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    args = parse_args(argv)
    cache = SessionCache(Path(args.file))

    if args.command == "check":
        return check(cache)
    if args.command == "cleanup":
        return cleanup(cache)
    if args.command == "setup":
        return setup(cache, force=args.force, headless=config.HEADLESS and not args.headed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
