import json

import click

from stravakit.auth import Credential
from stravakit.config import Config
from stravakit.exceptions import InvalidArgumentError, StravaError
from stravakit.logger import get_logger
from stravakit.models import Paging, StreamResolution, StreamSeriesDownsampling, StreamType


def _echo_json(value):
    """Print a model, a list of models or None as JSON."""
    if isinstance(value, list):
        payload = [item.model_dump(mode="json", exclude_none=True) for item in value]
    else:
        payload = value.model_dump(mode="json", exclude_none=True)
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _run(ctx, func, *args, not_found="Not found", **kwargs):
    """Call a service operation and print its result, turning errors into CLI failures."""
    try:
        result = func(*args, **kwargs)
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e))
    except StravaError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    if result is None:
        click.echo(not_found, err=True)
        ctx.exit(1)
    _echo_json(result)


@click.group()
@click.option('--token', envvar='STRAVA_ACCESS_TOKEN', help='Strava access token')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, token, verbose):
    """Query the Strava API with a personal access token."""
    logger = get_logger("stravakit")
    if verbose:
        logger.setLevel("DEBUG")

    token = token or Config.ACCESS_TOKEN
    if not token:
        raise click.UsageError("No access token. Use --token or set STRAVA_ACCESS_TOKEN.")

    credential = Credential(token)
    ctx.obj = credential
    ctx.call_on_close(credential.close)


@cli.command()
@click.argument('athlete_id', type=int, required=False)
@click.pass_context
def athlete(ctx, athlete_id):
    """Show an athlete (yourself if no id is given)."""
    credential = ctx.obj
    if athlete_id is None:
        _run(ctx, credential.athletes.get_authenticated_athlete)
    else:
        _run(ctx, credential.athletes.get_athlete, athlete_id,
             not_found=f"Athlete {athlete_id} not found")


@cli.command()
@click.argument('athlete_id', type=int)
@click.pass_context
def stats(ctx, athlete_id):
    """Show totals for an athlete."""
    _run(ctx, ctx.obj.athletes.statistics, athlete_id,
         not_found=f"Athlete {athlete_id} not found")


@cli.command()
@click.argument('activity_id', type=int)
@click.option('--all-efforts', is_flag=True, help='Include every segment effort')
@click.pass_context
def activity(ctx, activity_id, all_efforts):
    """Show an activity."""
    _run(ctx, ctx.obj.activities.get_activity, activity_id, include_all_efforts=all_efforts,
         not_found=f"Activity {activity_id} not found")


@cli.command()
@click.option('--page', default=1, help='Page number')
@click.option('--per-page', default=Config.DEFAULT_PER_PAGE, help='Activities per page')
@click.pass_context
def activities(ctx, page, per_page):
    """List your activities, newest first."""
    _run(ctx, ctx.obj.activities.list_authenticated_athlete_activities,
         paging=Paging(page=page, per_page=per_page))


@cli.command()
@click.argument('segment_id', type=int)
@click.pass_context
def segment(ctx, segment_id):
    """Show a segment."""
    _run(ctx, ctx.obj.segments.get_segment, segment_id,
         not_found=f"Segment {segment_id} not found")


@cli.command()
@click.argument('effort_id', type=int)
@click.pass_context
def effort(ctx, effort_id):
    """Show a segment effort."""
    _run(ctx, ctx.obj.segment_efforts.get_segment_effort, effort_id,
         not_found=f"Segment effort {effort_id} not found")


@cli.command()
@click.argument('parent', type=click.Choice(['activity', 'effort', 'segment']))
@click.argument('parent_id', type=int)
@click.option('--type', 'stream_types', multiple=True,
              type=click.Choice([t.value for t in StreamType if t != StreamType.UNKNOWN]),
              help='Stream type (can specify multiple, default: all)')
@click.option('--resolution',
              type=click.Choice([r.value for r in StreamResolution if r != StreamResolution.UNKNOWN]))
@click.option('--series-type',
              type=click.Choice([s.value for s in StreamSeriesDownsampling
                                 if s != StreamSeriesDownsampling.UNKNOWN]))
@click.pass_context
def streams(ctx, parent, parent_id, stream_types, resolution, series_type):
    """Show the streams of an activity, segment effort or segment."""
    service = ctx.obj.streams
    fetch = {
        'activity': service.get_activity_streams,
        'effort': service.get_effort_streams,
        'segment': service.get_segment_streams,
    }[parent]
    _run(ctx, fetch, parent_id,
         resolution=resolution,
         series_type=series_type,
         types=list(stream_types),
         not_found=f"{parent.capitalize()} {parent_id} not found")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
