"""CLI 命令列工具

提供當前節氣查詢、節氣環 SVG 輸出、時鐘與節氣詩詞等命令列功能。
"""

import asyncio

import click

from suishi.config import settings
from suishi.services.ai_engine import generate_term_insight
from suishi.services.clock import FixedClock, SystemClock, format_clock_face, run_clock_ticker
from suishi.services.interaction import ViewSession
from suishi.services.ring_svg import render_ring_svg
from suishi.services.term_resolver import days_until_next_term, resolve_next_term
from suishi.services.term_table import get_term_by_id, get_term_table


def _clock_for(query_date):
    if query_date:
        return FixedClock(query_date)
    return SystemClock(settings.utc_offset_hours)


@click.group()
def cli():
    """岁时 · 节气 CLI 工具"""
    pass


@cli.command()
@click.option("--date", "query_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="查詢日期，預設為今天")
def current(query_date):
    """顯示當前節氣"""
    table = get_term_table()
    session = ViewSession(table, _clock_for(query_date))
    term = session.current_term
    nxt = resolve_next_term(session.today, table)

    click.echo(f"{session.today.isoformat()} 當前節氣：{term.name}（{term.translation}，{term.anchor_text}）")
    click.echo(f"  下一個節氣：{nxt.name}，還有 {days_until_next_term(session.today, table)} 天")


@cli.command()
@click.option("--date", "query_date", type=click.DateTime(formats=["%Y-%m-%d"]), help="今日日期，預設為今天")
@click.option("--focus", type=click.IntRange(0, 11), default=None, help="懸停展開的月份索引 (0 = 一月)")
@click.option("--select", "term_id", type=int, default=None, help="選取的節氣序號")
@click.option("--out", type=click.Path(dir_okay=False, writable=True), required=True, help="輸出的 SVG 檔案")
def ring(query_date, focus, term_id, out):
    """輸出節氣環 SVG"""
    table = get_term_table()
    session = ViewSession(table, _clock_for(query_date))
    if term_id is not None:
        term = get_term_by_id(term_id, table)
        if term is None:
            raise click.BadParameter(f"找不到節氣：{term_id}", param_hint="--select")
        session.select(term)
    if focus is not None:
        session.hover(focus)

    svg = render_ring_svg(session.layout(), format_clock_face(session.clock.now()))
    with open(out, "w", encoding="utf-8") as f:
        f.write(svg)
    click.echo(f"已輸出：{out}（展開 {session.focus_month + 1} 月）")


@cli.command()
@click.option("--count", type=int, default=None, help="顯示次數，預設持續執行")
def clock(count):
    """顯示每秒更新的時鐘"""
    try:
        asyncio.run(
            run_clock_ticker(SystemClock(settings.utc_offset_hours), click.echo, ticks=count)
        )
    except KeyboardInterrupt:
        pass


@cli.command()
@click.argument("term_id", type=int)
def insight(term_id):
    """生成節氣詩詞"""
    term = get_term_by_id(term_id)
    if term is None:
        raise click.BadParameter(f"找不到節氣：{term_id}", param_hint="TERM_ID")

    click.echo(f"正在生成「{term.name}」的詩詞...")
    result = asyncio.run(generate_term_insight(term))
    click.echo(result.poem)
    click.echo(f"養生：{result.advice}")
    click.echo(f"食材：{result.food}")


if __name__ == "__main__":
    cli()
