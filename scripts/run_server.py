#!/usr/bin/env python
"""
애플리케이션 호스트 API 서버 실행 스크립트

사용법:
    # 개발 모드 (코드 핫 리로드)
    python scripts/run_server.py --env dev --reload

    # 프로덕션 모드 (멀티 워커)
    python scripts/run_server.py --env prod --workers 4 --config /etc/app/app.properties
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def setup_logging(level: str = "INFO") -> None:
    """로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_env_file(env: str) -> Path | None:
    """환경별 .env 파일 로드 (첫 번째로 존재하는 파일만)"""
    env_files = [
        PROJECT_ROOT / f".env.{env}",
        PROJECT_ROOT / ".env.local",
        PROJECT_ROOT / ".env",
    ]

    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file)
            logging.getLogger(__name__).info(f"[Server] 환경 파일 로드: {env_file}")
            return env_file
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="애플리케이션 호스트 API 서버")

    parser.add_argument(
        "--env",
        choices=["dev", "staging", "prod"],
        default="dev",
        help="실행 환경 (기본: dev)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="바인딩 호스트 (기본: 환경변수 API_HOST 또는 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="바인딩 포트 (기본: 환경변수 API_PORT 또는 8000)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="워커 프로세스 수 (기본: 1)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="코드 변경 시 자동 리로드 (개발 모드용)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="로그 레벨",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="설정 파일 경로 (기본: 환경변수 CONFIG_PATH 또는 app.properties)",
    )
    parser.add_argument(
        "--refresh-delay",
        type=float,
        default=None,
        help="설정 파일 변경 확인 최소 간격 (초)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """메인 함수"""
    args = build_parser().parse_args(argv)

    os.environ["ENV"] = args.env

    log_level = args.log_level or ("DEBUG" if args.env == "dev" else "INFO")
    setup_logging(log_level)
    load_env_file(args.env)

    host = args.host or os.getenv("API_HOST", "0.0.0.0")
    port = args.port or int(os.getenv("API_PORT", "8000"))
    workers = max(args.workers, 1)

    # create_app_from_env 가 읽는 환경변수
    if args.config:
        os.environ["CONFIG_PATH"] = args.config
    if args.refresh_delay is not None:
        os.environ["CONFIG_REFRESH_DELAY"] = str(args.refresh_delay)

    uvicorn_config = {
        "app": "api.server:create_app_from_env",
        "factory": True,
        "host": host,
        "port": port,
        "log_level": log_level.lower(),
        "reload": args.reload,
    }

    # 멀티 워커 (리로드와 동시 사용 불가)
    if workers > 1 and not args.reload:
        uvicorn_config["workers"] = workers

    if args.reload:
        uvicorn_config["reload_dirs"] = [
            str(PROJECT_ROOT / "api"),
            str(PROJECT_ROOT / "config"),
            str(PROJECT_ROOT / "lib"),
        ]

    logging.getLogger(__name__).info(
        f"[Server] 시작: env={args.env}, {host}:{port}, workers={workers}"
    )
    uvicorn.run(**uvicorn_config)


if __name__ == "__main__":
    main()
