"""
JavaScript for Automation (JXA) sources run by the osascript provider.

The sources are constants. Per-call values arrive as a JSON document in
`argv[0]` and are only ever read as data inside the script.
"""

PERSPECTIVE_DATA_SCRIPT = r"""
function isoOrNull(value) {
  return value ? value.toISOString() : null;
}

function projectNameOf(task) {
  try {
    var project = task.containingProject();
    return project ? project.name() : null;
  } catch (e) {
    return null;
  }
}

function taskRecord(task) {
  return {
    id: task.id(),
    name: task.name(),
    completed: task.completed(),
    dropped: task.dropped(),
    flagged: task.flagged(),
    estimatedMinutes: task.estimatedMinutes(),
    dueDate: isoOrNull(task.dueDate()),
    deferDate: isoOrNull(task.deferDate()),
    tags: task.tags().map(function (tag) { return tag.name(); }),
    projectName: projectNameOf(task),
    note: task.note()
  };
}

function projectRecord(project) {
  return {
    id: project.id(),
    name: project.name(),
    status: project.status(),
    flagged: project.flagged(),
    estimatedMinutes: project.estimatedMinutes(),
    dueDate: isoOrNull(project.dueDate()),
    taskCount: project.tasks().length
  };
}

function run(argv) {
  try {
    var request = JSON.parse(argv[0]);
    var app = Application("OmniFocus");
    var doc = app.defaultDocument;
    var builtIns = ["Inbox", "Projects", "Tags", "Forecast", "Flagged", "Review"];
    var name = request.perspectiveName;

    if (builtIns.indexOf(name) < 0 && doc.perspectives.name().indexOf(name) < 0) {
      return JSON.stringify({success: false, error: "Perspective not found: " + name});
    }

    doc.documentWindows[0].perspectiveName = name;
    delay(0.5);

    return JSON.stringify({
      success: true,
      perspective: name,
      tasks: doc.flattenedTasks().map(taskRecord),
      projects: doc.flattenedProjects().map(projectRecord)
    });
  } catch (e) {
    return JSON.stringify({success: false, error: String(e.message || e)});
  }
}
"""

PERSPECTIVE_LIST_SCRIPT = r"""
function run(argv) {
  try {
    var doc = Application("OmniFocus").defaultDocument;
    return JSON.stringify({success: true, perspectives: doc.perspectives.name()});
  } catch (e) {
    return JSON.stringify({success: false, error: String(e.message || e)});
  }
}
"""
