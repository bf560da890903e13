import subprocess
import sys

# List of modules to run in order
modules = [
    "GraphConstruction.construct_graph",
    "GraphAnalysis.summarize_graph",
]

def run_pipeline(input_path: str) -> bool:
    for module in modules:
        print(f"\n=== Running {module} ===")
        try:
            # Run the module as a blocking subprocess
            subprocess.run([sys.executable, "-m", module, input_path], check=True)
            print(f"--- Finished {module} ---\n")
        except subprocess.CalledProcessError as e:
            print(f"Error while running {module}: {e}")
            return False  # Stop the pipeline if one module fails
    return True

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1:
        sys.exit("Usage: python run_pipeline.py <filename>")
    if not run_pipeline(argv[0]):
        sys.exit(1)

if __name__ == "__main__":
    main()
