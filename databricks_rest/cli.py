"""
Command-line interface for the Databricks REST Toolkit.
"""

import logging
import functools
import click
import json
import requests
import pandas as pd
from tabulate import tabulate

from databricks_rest import DatabricksClient
from databricks_rest.config import Config
from databricks_rest.errors import DatabricksRestError
from databricks_rest.utils import format_size

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler("databricks_rest.log"),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger("databricks-rest.cli")


def get_workspace_client(workspace_name=None):
    """Get a DatabricksClient for the specified workspace."""
    config = Config()
    workspace_config = config.get_workspace_config(workspace_name)

    url = workspace_config.get('url')
    if not url:
        logger.error("No workspace URL found. Set DATABRICKS_HOST (and DATABRICKS_TOKEN) "
                     "environment variables or create a config file.")
        return None

    timeout = config.get_http_config().get('timeout', 30)
    return DatabricksClient(url, workspace_config.get('token'), timeout)


def handle_errors(func):
    """Turn toolkit and HTTP errors into a failed command with a readable message."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (DatabricksRestError, ValueError) as e:
            raise click.ClickException(str(e))
        except requests.exceptions.HTTPError as e:
            raise click.ClickException(f"The request was not successful: {e}")
    return wrapper


def echo_table(rows):
    """Print a list of dicts or a DataFrame as a table."""
    df = rows if isinstance(rows, pd.DataFrame) else pd.DataFrame(rows)
    click.echo(tabulate(df, headers='keys', tablefmt='psql', showindex=False))


def write_json(output, data):
    with open(output, 'w') as f:
        json.dump(data, f, indent=2, default=str)
    click.echo(f"Results written to {output}")


def job_options(func):
    func = click.option('--name', '-n', help='Job name (must be unique in the workspace)')(func)
    func = click.option('--job-id', '-j', type=int, help='Job ID')(func)
    return func


@click.group()
def cli():
    """Databricks REST Toolkit - Manage jobs, clusters, libraries and DBFS from the shell."""
    pass


@cli.command('list-jobs')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--output', '-o', help='Output file (JSON)')
@handle_errors
def list_jobs(workspace, output):
    """List the jobs in a workspace."""
    client = get_workspace_client(workspace)
    if not client:
        return

    directory = client.fetch_all_jobs()
    if not directory:
        click.echo("No jobs found.")
        return

    df = client.jobs.jobs_to_dataframe(directory)
    echo_table(df)

    if output:
        write_json(output, df.to_dict(orient='records'))


@cli.command('list-runs')
@click.option('--workspace', '-w', help='Workspace name from config')
@job_options
@click.option('--offset', default=0, help='Index of the first run, relative to the most recent')
@click.option('--limit', default=20, help='Number of runs to return (0 for the maximum)')
@click.option('--active-only', is_flag=True, help='Only active runs')
@click.option('--completed-only', is_flag=True, help='Only completed runs')
@click.option('--output', '-o', help='Output file (JSON)')
@handle_errors
def list_runs(workspace, job_id, name, offset, limit, active_only, completed_only, output):
    """List the runs of a job, most recent first."""
    client = get_workspace_client(workspace)
    if not client:
        return

    response = client.list_runs(job_id=job_id, name=name, offset=offset, limit=limit,
                                active_only=active_only, completed_only=completed_only)
    runs = response.get('runs', [])
    if not runs:
        click.echo("No runs found.")
        return

    df = client.jobs.runs_to_dataframe(response)
    columns = [c for c in ['run_id', 'number_in_job', 'state.life_cycle_state',
                           'state.result_state', 'start_time', 'run_page_url'] if c in df.columns]
    echo_table(df[columns])

    if response.get('has_more'):
        click.echo("More runs are available, use --offset to list them.")

    if output:
        write_json(output, response)


@cli.command('delete-job')
@click.option('--workspace', '-w', help='Workspace name from config')
@job_options
@click.confirmation_option(prompt='Are you sure you want to delete this job?')
@handle_errors
def delete_job(workspace, job_id, name):
    """Delete a job by ID or by name."""
    client = get_workspace_client(workspace)
    if not client:
        return

    client.delete_job(job_id=job_id, name=name)
    click.echo(f"Job {name if name is not None else job_id} has been deleted.")


@cli.command('reset-job')
@click.option('--workspace', '-w', help='Workspace name from config')
@job_options
@click.option('--config', '-c', 'config_file', required=True, type=click.Path(exists=True),
              help='JSON file with the new job settings')
@handle_errors
def reset_job(workspace, job_id, name, config_file):
    """Overwrite the settings of a job."""
    client = get_workspace_client(workspace)
    if not client:
        return

    client.reset_job(config_file, job_id=job_id, name=name)
    click.echo(f"Job {name if name is not None else job_id} settings updated.")


@cli.command('run-job')
@click.option('--workspace', '-w', help='Workspace name from config')
@job_options
@handle_errors
def run_job(workspace, job_id, name):
    """Trigger a run of a job now."""
    client = get_workspace_client(workspace)
    if not client:
        return

    response = client.run_job(job_id=job_id, name=name)
    click.echo(f"Run launched, run ID: {response.get('run_id')}")


@cli.command('run-status')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--run-id', '-r', required=True, type=int, help='Run ID')
@handle_errors
def run_status(workspace, run_id):
    """Show the state of a run."""
    client = get_workspace_client(workspace)
    if not client:
        return

    status = client.get_run_status(run_id)
    state = status.get('state', {})
    echo_table([{
        'run_id': status.get('run_id'),
        'job_id': status.get('job_id'),
        'life_cycle_state': state.get('life_cycle_state'),
        'result_state': state.get('result_state', ''),
        'run_page_url': status.get('run_page_url'),
    }])


@cli.command('list-clusters')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--output', '-o', help='Output file (JSON)')
@handle_errors
def list_clusters(workspace, output):
    """List the clusters in a workspace."""
    client = get_workspace_client(workspace)
    if not client:
        return

    clusters = client.get_cluster_list()
    if not clusters:
        click.echo("No clusters found.")
        return

    echo_table([{
        'cluster_id': c.get('cluster_id'),
        'cluster_name': c.get('cluster_name'),
        'state': c.get('state'),
        'spark_version': c.get('spark_version'),
    } for c in clusters])

    if output:
        write_json(output, clusters)


@cli.command('cluster-status')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--cluster-id', '-c', required=True, help='Cluster ID')
@handle_errors
def cluster_status(workspace, cluster_id):
    """Show the state of a cluster."""
    client = get_workspace_client(workspace)
    if not client:
        return

    status = client.get_cluster_status(cluster_id)
    click.echo(f"Cluster {status.get('cluster_name', cluster_id)}: {status.get('state')}")
    if status.get('state_message'):
        click.echo(status['state_message'])


@cli.command('start-cluster')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--cluster-id', '-c', required=True, help='Cluster ID')
@handle_errors
def start_cluster(workspace, cluster_id):
    """Start a terminated cluster."""
    client = get_workspace_client(workspace)
    if not client:
        return

    client.clusters.start_cluster(cluster_id)
    click.echo(f"Cluster {cluster_id} is starting. Use cluster-status to follow it.")


@cli.command('terminate-cluster')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--cluster-id', '-c', required=True, help='Cluster ID')
@handle_errors
def terminate_cluster(workspace, cluster_id):
    """Terminate a cluster."""
    client = get_workspace_client(workspace)
    if not client:
        return

    client.clusters.terminate_cluster(cluster_id)
    click.echo(f"Cluster {cluster_id} is terminating.")


@cli.command('library-statuses')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.option('--cluster-id', '-c', help='Cluster ID (all clusters if omitted)')
@handle_errors
def library_statuses(workspace, cluster_id):
    """Show the status of libraries on one or all clusters."""
    client = get_workspace_client(workspace)
    if not client:
        return

    response = client.libraries.get_library_statuses(cluster_id)
    if cluster_id is None:
        clusters = response.get('statuses', [])
    else:
        clusters = [response]

    rows = []
    for cluster in clusters:
        for lib in cluster.get('library_statuses', []):
            library = lib.get('library', {})
            kind = next(iter(library), 'unknown')
            spec = library.get(kind)
            rows.append({
                'cluster_id': cluster.get('cluster_id'),
                'type': kind,
                'library': spec.get('package', json.dumps(spec)) if isinstance(spec, dict) else spec,
                'status': lib.get('status'),
            })

    if not rows:
        click.echo("No libraries found.")
        return

    echo_table(rows)


@cli.command('dbfs-ls')
@click.option('--workspace', '-w', help='Workspace name from config')
@click.argument('path', default='/')
@handle_errors
def dbfs_ls(workspace, path):
    """List the contents of a DBFS directory."""
    client = get_workspace_client(workspace)
    if not client:
        return

    files = client.dbfs.ls(path)
    if not files:
        click.echo(f"{path} is empty.")
        return

    echo_table([{
        'path': f.get('path'),
        'type': 'dir' if f.get('is_dir') else 'file',
        'size': '' if f.get('is_dir') else format_size(f.get('file_size', 0)),
    } for f in files])


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
