# scripts/seed_data.py

"""
개발 데이터베이스에 테스트 데이터(사용자 유형, 팀 유형, 팀, 사용자, 소방대원)를 채우는 CLI 입니다.

사용 예:
    python -m scripts.seed_data --equipos 5 --usuarios-por-tipo 2
"""

import asyncio
import random
from typing import Optional

import typer

from app.core.database import create_db_and_tables, engine, get_async_session_context
from app.main import configure_logging
from app.services.external_services import build_compania_client, build_estado_client, build_http_client
from app.services.seed_service import SeedError, SeedResumen, SeedService

cli = typer.Typer()


async def run_seed(
    num_equipos: Optional[int],
    usuarios_por_tipo: Optional[int],
    semilla: Optional[int],
    crear_tablas: bool,
) -> SeedResumen:
    if crear_tablas:
        await create_db_and_tables()

    http = build_http_client()
    try:
        async with get_async_session_context() as db:
            return await SeedService(
                db,
                build_estado_client(http),
                build_compania_client(http),
                random.Random(semilla),
                num_equipos=num_equipos,
                usuarios_por_tipo=usuarios_por_tipo,
            ).run()
    finally:
        await http.aclose()
        await engine.dispose()


@cli.command()
def main(
    equipos: Optional[int] = typer.Option(
        None, '--equipos', '-e',
        help="생성할 팀 수입니다. 지정하지 않으면 SEED_EQUIPOS 설정값을 사용합니다."
    ),
    usuarios_por_tipo: Optional[int] = typer.Option(
        None, '--usuarios-por-tipo', '-u',
        help="사용자 유형별로 생성할 사용자 수입니다."
    ),
    semilla: Optional[int] = typer.Option(
        None, '--semilla', '-s',
        help="난수 시드입니다. 같은 시드는 같은 데이터를 만듭니다."
    ),
    crear_tablas: bool = typer.Option(
        True, '--crear-tablas/--sin-crear-tablas',
        help="실행 전에 누락된 테이블을 생성합니다."
    ),
):
    """
    API Perfiles 데이터베이스에 테스트 데이터를 생성합니다.
    estado / compania 외부 API 가 응답하지 않으면 팀과 사용자는 만들지 않습니다.
    """
    configure_logging()
    try:
        resumen = asyncio.run(run_seed(equipos, usuarios_por_tipo, semilla, crear_tablas))
    except SeedError as e:
        typer.echo(f"오류: {e}", err=True)
        raise typer.Exit(code=1)

    if resumen.aborted:
        typer.echo("외부 API 에서 estado 또는 compania 목록을 가져오지 못해 중단했습니다.", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"완료: 팀 {resumen.equipos}개, 사용자 {resumen.usuarios}명, 소방대원 {resumen.bomberos}명을 생성했습니다."
    )


if __name__ == "__main__":
    cli()
