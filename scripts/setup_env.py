"""初始化测试环境变量文件。"""

from __future__ import annotations

import argparse
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

CONFIG_TEMPLATE = """# e-wallet 测试环境变量，请替换为真实凭据
EMAIL=your-email@example.com
PASSWORD=your-password
TOTP_SECRET=your-totp-secret-key
BASE_URL=https://ewallet.walletwhisper.io
TIMEOUT_DEFAULT=60000
"""

REQUIRED_VARIABLES = [
    ("EMAIL", "后台管理员邮箱"),
    ("PASSWORD", "后台管理员密码"),
    ("TOTP_SECRET", "二次验证的 base32 共享密钥"),
    ("BASE_URL", "被测后台地址（默认 https://ewallet.walletwhisper.io）"),
    ("TIMEOUT_DEFAULT", "用例超时毫秒数（默认 60000）"),
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """解析命令参数。"""

    parser = argparse.ArgumentParser(description="检查并生成测试环境变量文件")
    parser.add_argument("--root", default=str(ROOT), help="项目根目录")
    return parser.parse_args(argv)


def ensure_config_file(root: Path) -> Path | None:
    """.env 或 config.env 已存在时不做修改；都不存在时生成 config.env 模板。"""

    env_path = root / ".env"
    config_env_path = root / "config.env"

    if env_path.exists():
        print(f"[ok] 已存在 {env_path}")
        return None
    if config_env_path.exists():
        print(f"[ok] 已存在 {config_env_path}，请复制为 .env 并填写真实凭据")
        return None

    config_env_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    print(f"[ok] 已生成 {config_env_path}，请填写真实凭据")
    return config_env_path


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    ensure_config_file(Path(args.root))

    print("\n需要的环境变量：")
    for name, description in REQUIRED_VARIABLES:
        print(f"  {name:<16}{description}")
    print("\n下一步：python scripts/auth_state.py setup 生成登录态，然后运行 pytest -m e2e")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
