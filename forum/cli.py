# forum/cli.py

"""
운영용 명령줄 도구입니다.

    forum serve            # uvicorn으로 API 서버 실행 (BACKEND_PORT)
    forum init-db          # 테이블 생성 (개발용, 운영은 Alembic)
    forum create-user ...  # 계정 생성
"""

import asyncio
from typing import Optional

import typer
import uvicorn
from fastapi import HTTPException
from pydantic import ValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from forum.core.config import settings
from forum.core.database import create_db_and_tables, get_async_session_context
from forum.domains.usr import crud as usr_crud
from forum.domains.usr import models as usr_models
from forum.domains.usr import schemas as usr_schemas

cli = typer.Typer(help="Trapziu forum API management commands.")


async def create_user_account(db: AsyncSession, user_in: usr_schemas.UserCreate) -> usr_models.User:
    """
    계정을 생성하는 비동기 함수. 이메일/사용자명이 중복이면 HTTPException(409)이 전파됩니다.
    """
    return await usr_crud.user.create(db, obj_in=user_in)


@cli.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="바인딩할 호스트"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="기본값: BACKEND_PORT"),
    reload: bool = typer.Option(False, "--reload", help="코드 변경 시 자동 재시작 (개발용)"),
):
    """API 서버를 실행합니다."""
    uvicorn.run(
        "forum.main:app",
        host=host,
        port=port or settings.BACKEND_PORT,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


@cli.command("init-db")
def init_db():
    """모든 테이블을 생성합니다. 이미 있는 테이블은 건드리지 않습니다."""
    asyncio.run(create_db_and_tables())
    typer.echo("Database tables are ready.")


@cli.command("create-user")
def create_user(
    username: str = typer.Argument(..., help="프로필 경로에 쓰이는 사용자명"),
    email: str = typer.Argument(..., help="로그인 이메일"),
    password: str = typer.Option(
        ..., "--password", "-p",
        prompt="비밀번호를 입력하세요",
        hide_input=True,
        confirmation_prompt=True,
        help="최소 8자 이상",
    ),
):
    """새 포럼 계정을 생성합니다."""
    try:
        user_in = usr_schemas.UserCreate(username=username, email=email, password=password)
    except ValidationError as e:
        typer.echo(f"Error: invalid input\n{e}", err=True)
        raise typer.Exit(code=1)

    async def run_creation() -> usr_models.User:
        async with get_async_session_context() as db:
            return await create_user_account(db, user_in)

    try:
        user = asyncio.run(run_creation())
    except HTTPException as e:
        typer.echo(f"Error: {e.detail}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"User '{user.username}' created (ID: {user.id}).")


if __name__ == "__main__":
    cli()
